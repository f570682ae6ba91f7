"""Tracura - Template catalog adapters."""

from .builtin_catalog import BUILTIN_TEMPLATES, KNOWN_BUSINESS_TYPES, BuiltinTemplateCatalog

__all__ = ["BUILTIN_TEMPLATES", "KNOWN_BUSINESS_TYPES", "BuiltinTemplateCatalog"]
