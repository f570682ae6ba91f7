"""
Tracura - Infrastructure Factory

Factory functions for dependency injection and easy setup.
"""
import logging
from typing import Any

from tracura.application.draft_reconciler import DraftReconciler
from tracura.application.form_session import ProjectFormSession
from tracura.application.name_check import ProjectNameChecker
from tracura.application.submission import ProjectSubmitter
from tracura.application.template_loader import TemplateLoader
from tracura.domain.interfaces import LocalSnapshotStore, RemoteDocumentStore
from tracura.domain.models.config import AppConfig
from tracura.domain.validation import ProjectValidator
from tracura.infrastructure.formatting.currency_formatter import GroupedCurrencyFormatter
from tracura.infrastructure.storage.file_snapshot_store import FileSnapshotStore
from tracura.infrastructure.storage.http_document_store import HttpDocumentStore
from tracura.infrastructure.storage.memory_document_store import InMemoryDocumentStore
from tracura.infrastructure.storage.memory_snapshot_store import InMemorySnapshotStore
from tracura.infrastructure.templates.builtin_catalog import BuiltinTemplateCatalog
from tracura.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def create_document_store(config: AppConfig) -> RemoteDocumentStore:
    """
    Create remote document store.

    Args:
        config: Application configuration

    Returns:
        HttpDocumentStore when a URL is configured, else InMemoryDocumentStore
    """
    if config.remote.url:
        return HttpDocumentStore(config.remote)
    logger.info("No remote URL configured, using in-memory document store")
    return InMemoryDocumentStore()


def create_snapshot_store(config: AppConfig) -> LocalSnapshotStore:
    """
    Create local snapshot store.

    Args:
        config: Application configuration

    Returns:
        FileSnapshotStore when a directory is configured, else InMemorySnapshotStore
    """
    if config.local.directory:
        return FileSnapshotStore(config.local.directory)
    return InMemorySnapshotStore()


def create_template_catalog(config: AppConfig) -> BuiltinTemplateCatalog:
    return BuiltinTemplateCatalog()


def create_currency_formatter(config: AppConfig) -> GroupedCurrencyFormatter:
    formatting = config.formatting
    if formatting.currency_symbol:
        return GroupedCurrencyFormatter(formatting.currency_symbol)
    return GroupedCurrencyFormatter.for_currency(formatting.currency)


def create_form_session(
    config: AppConfig,
    document_store: RemoteDocumentStore | None = None,
    snapshot_store: LocalSnapshotStore | None = None,
) -> ProjectFormSession:
    """
    Create a fully wired editing session.

    Args:
        config: Application configuration
        document_store: Remote store (None = built from config)
        snapshot_store: Local store (None = built from config)

    Returns:
        ProjectFormSession (no name check/submission without a customer id)
    """
    document_store = document_store or create_document_store(config)
    snapshot_store = snapshot_store or create_snapshot_store(config)
    customer_id = config.remote.customer_id or None

    validator = ProjectValidator(config.validation)
    reconciler = DraftReconciler(
        snapshot_store,
        document_store,
        customer_id,
        snapshot_key=config.local.snapshot_key,
        remote_drafts_enabled=config.drafts.remote_drafts_enabled,
    )
    name_checker = None
    submitter = None
    if customer_id:
        name_checker = ProjectNameChecker(
            document_store,
            customer_id,
            debounce_ms=config.drafts.name_check_debounce_ms,
        )
        submitter = ProjectSubmitter(document_store, customer_id, validator=validator, reconciler=reconciler)
    else:
        logger.warning("No customer id configured: name check and submission disabled")

    return ProjectFormSession(
        reconciler=reconciler,
        template_loader=TemplateLoader(create_template_catalog(config), document_store, customer_id),
        validator=validator,
        formatter=create_currency_formatter(config),
        name_checker=name_checker,
        submitter=submitter,
    )


def quick_setup(
    customer_id: str = "local",
    remote_url: str = "",
    snapshot_dir: str = "",
    log_level: str = "INFO",
) -> dict[str, Any]:
    """
    Quick setup with default configuration.

    Args:
        customer_id: Customer whose documents are used
        remote_url: Document store URL (empty = in-memory)
        snapshot_dir: Snapshot directory (empty = in-memory)
        log_level: Root logging level

    Returns:
        Dict with initialized components:
        - config: AppConfig
        - documents: RemoteDocumentStore
        - snapshots: LocalSnapshotStore
        - session: ProjectFormSession
    """
    from tracura.domain.models.config import LocalStoreConfig, RemoteStoreConfig

    config = AppConfig(
        remote=RemoteStoreConfig(url=remote_url, customer_id=customer_id),
        local=LocalStoreConfig(directory=snapshot_dir),
        log_level=log_level,
    )
    configure_logging(config.log_level)
    documents = create_document_store(config)
    snapshots = create_snapshot_store(config)

    components = {
        "config": config,
        "documents": documents,
        "snapshots": snapshots,
        "session": create_form_session(config, documents, snapshots),
    }
    logger.info("✅ Quick setup complete")
    return components
