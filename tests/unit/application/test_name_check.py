"""
Unit tests for the debounced project name check.
"""

import asyncio
from unittest.mock import Mock

import pytest

from tracura.application.debounce import Debouncer
from tracura.application.name_check import ProjectNameChecker
from tracura.domain.exceptions import RemoteUnavailable
from tracura.domain.interfaces import projects_path
from tracura.infrastructure.storage import InMemoryDocumentStore

CUSTOMER = "cust-1"


@pytest.fixture
def store():
    return InMemoryDocumentStore({
        projects_path(CUSTOMER): {
            "p-1": {"name": "Tower A"},
            "p-2": {"name": "Mall Renovation"},
        }
    })


@pytest.fixture
def checker(store):
    return ProjectNameChecker(store, CUSTOMER, debounce_ms=0)


class TestCheck:
    """Test the blocking lookup"""

    def test_taken(self, checker):
        assert checker.check("  tower a ") is True

    def test_free(self, checker):
        assert checker.check("Tower B") is False

    def test_empty_name(self, checker):
        assert checker.check("   ") is False

    def test_edited_project_excluded(self, store):
        checker = ProjectNameChecker(store, CUSTOMER, excluded_project_id="p-1")
        assert checker.check("Tower A") is False
        assert checker.check("Mall Renovation") is True

    def test_no_projects_document(self):
        checker = ProjectNameChecker(InMemoryDocumentStore(), CUSTOMER)
        assert checker.check("Tower A") is False


class TestScheduledCheck:
    """Test debounced checks"""

    async def test_result_applied(self, checker):
        assert await checker.schedule("Tower A") is True
        assert checker.name_taken is True
        assert await checker.schedule("Tower B") is False
        assert checker.name_taken is False

    async def test_rapid_typing_checks_last_name_only(self, store):
        store = Mock(wraps=store)
        checker = ProjectNameChecker(store, CUSTOMER, debounce_ms=50)

        first = checker.schedule("Tow")
        second = checker.schedule("Towe")
        last = checker.schedule("Tower A")
        assert checker.checking is True

        assert await last is True
        assert first.cancelled() and second.cancelled()
        assert store.get_document.call_count == 1
        assert checker.name_taken is True

    async def test_cancel_discards_result(self, checker):
        task = checker.schedule("Tower A")
        checker.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert checker.name_taken is False

    async def test_failure_keeps_previous_result(self, store):
        checker = ProjectNameChecker(store, CUSTOMER, debounce_ms=0)
        assert await checker.schedule("Tower A") is True

        failing = Mock()
        failing.get_document.side_effect = RemoteUnavailable("down", path="projects")
        checker.store = failing

        assert await checker.schedule("Tower B") is None
        assert checker.name_taken is True

    async def test_empty_name_resets(self, checker):
        await checker.schedule("Tower A")
        task = checker.schedule("")
        assert checker.name_taken is False
        assert await task is False

    async def test_reset(self, checker):
        await checker.schedule("Tower A")
        checker.reset()
        assert checker.name_taken is False


class TestDebouncer:
    """Test the generic debouncer"""

    def test_negative_delay(self):
        with pytest.raises(ValueError):
            Debouncer(-1)

    async def test_result_passed_to_callback(self):
        debouncer = Debouncer(0)
        applied = []

        async def echo(value):
            return value

        assert await debouncer.call(echo, "ok", on_result=applied.append) == "ok"
        assert applied == ["ok"]
        assert debouncer.pending is False

    async def test_newer_call_supersedes(self):
        debouncer = Debouncer(0.05)
        applied = []

        async def echo(value):
            return value

        stale = debouncer.call(echo, "old", on_result=applied.append)
        fresh = debouncer.call(echo, "new", on_result=applied.append)

        assert await fresh == "new"
        assert stale.cancelled()
        assert applied == ["new"]

    async def test_in_flight_call_cancelled(self):
        debouncer = Debouncer(0)
        applied = []
        started = asyncio.Event()

        async def slow(value):
            started.set()
            await asyncio.Event().wait()
            return value

        async def echo(value):
            return value

        stale = debouncer.call(slow, "old", on_result=applied.append)
        await started.wait()
        fresh = debouncer.call(echo, "new", on_result=applied.append)

        with pytest.raises(asyncio.CancelledError):
            await stale
        assert await fresh == "new"
        assert applied == ["new"]

    async def test_result_after_ignored_cancel_is_none(self):
        """A func that outlives its cancellation yields None, not its result"""
        debouncer = Debouncer(0)
        applied = []
        started = asyncio.Event()

        async def stubborn(value):
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                pass
            return value

        stale = debouncer.call(stubborn, "old", on_result=applied.append)
        await started.wait()
        debouncer.cancel()

        assert await stale is None
        assert applied == []
