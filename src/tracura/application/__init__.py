"""Tracura - Application services (drafts, templates, name check, submission)."""

from .debounce import Debouncer
from .draft_reconciler import DraftReconciler, reconcile_expanded_ids
from .name_check import ProjectNameChecker
from .template_loader import TemplateLoader
from .submission import ProjectSubmitter, build_project_document
from .form_session import ProjectFormSession

__all__ = [
    "Debouncer",
    "DraftReconciler",
    "reconcile_expanded_ids",
    "ProjectNameChecker",
    "TemplateLoader",
    "ProjectSubmitter",
    "build_project_document",
    "ProjectFormSession",
]
