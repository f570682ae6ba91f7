"""Tracura - Domain Models."""

from .catalog import LABOUR, ITEM_TYPES, UOM_OPTIONS, uom_options_for
from .line_item import LineItem
from .department import ContractorMode, Department
from .phase import Phase
from .template import ProjectTemplate, TemplateDepartment, TemplateLineItem, TemplatePhase, TemplateSummary
from .project import AuthoringContext, Project
from .draft import DraftSnapshot, DraftState, RemoteDraft
from .field_ref import FieldKind, FieldRef

__all__ = [
    # Catalog
    "LABOUR",
    "ITEM_TYPES",
    "UOM_OPTIONS",
    "uom_options_for",
    # Tree
    "LineItem",
    "ContractorMode",
    "Department",
    "Phase",
    "AuthoringContext",
    "Project",
    # Templates
    "ProjectTemplate",
    "TemplatePhase",
    "TemplateDepartment",
    "TemplateLineItem",
    "TemplateSummary",
    # Drafts
    "DraftState",
    "DraftSnapshot",
    "RemoteDraft",
    # Validation
    "FieldKind",
    "FieldRef",
]
