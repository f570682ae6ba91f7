"""In-memory LocalSnapshotStore (tests and ephemeral sessions)."""


class InMemorySnapshotStore:
    """Implements LocalSnapshotStore protocol with a dict."""

    def __init__(self):
        self._snapshots: dict[str, str] = {}

    def save_snapshot(self, key: str, blob: str) -> None:
        self._snapshots[key] = blob

    def load_snapshot(self, key: str) -> str | None:
        return self._snapshots.get(key)

    def clear_snapshot(self, key: str) -> None:
        self._snapshots.pop(key, None)
