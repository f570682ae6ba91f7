"""
Tracura - Template Catalog Protocol Interface
"""
from typing import Protocol

from ..models.template import ProjectTemplate, TemplateSummary


class TemplateCatalog(Protocol):
    """Protocol for static/seeded project template registries."""

    def list_templates(self, business_type: str | None = None) -> list[TemplateSummary]:
        """
        List template summaries.

        Args:
            business_type: Customer business type to filter by (None = all)

        Returns:
            Summaries sorted by name
        """
        ...

    def get_template(self, template_id: str) -> ProjectTemplate | None:
        """Get a template by id, or None if unknown."""
        ...
