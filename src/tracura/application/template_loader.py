"""
Tracura - Template Loader

Offers templates matching the customer's business type and seeds a project
from the chosen one.
"""
import logging

from tracura.domain.exceptions import NotFoundError, RemoteUnavailable
from tracura.domain.interfaces import RemoteDocumentStore, TemplateCatalog, customer_path
from tracura.domain.models.project import Project
from tracura.domain.models.template import ProjectTemplate, TemplateSummary

logger = logging.getLogger(__name__)

BUSINESS_TYPE_FIELD = "businessType"


class TemplateLoader:
    """Template selection for new projects."""

    def __init__(
        self,
        catalog: TemplateCatalog,
        document_store: RemoteDocumentStore | None = None,
        customer_id: str | None = None,
    ):
        self.catalog = catalog
        self.document_store = document_store
        self.customer_id = customer_id

    def fetch_business_type(self) -> str | None:
        """
        Read the customer's business type.

        Returns:
            Business type, or None when unknown (no store, no document,
            remote failure)
        """
        if self.document_store is None or not self.customer_id:
            return None
        try:
            document = self.document_store.get_document(customer_path(self.customer_id))
        except RemoteUnavailable as e:
            logger.warning(f"Business type unavailable, offering all templates: {e}")
            return None
        if not document:
            return None
        value = document.get(BUSINESS_TYPE_FIELD)
        return value if isinstance(value, str) and value.strip() else None

    def available_templates(self, project: Project) -> list[TemplateSummary]:
        """
        Templates offered for the project.

        Editing an existing project offers none (no business-type lookup).
        """
        if project.is_editing:
            logger.debug("Editing existing project: template lookup skipped")
            return []
        return self.catalog.list_templates(self.fetch_business_type())

    def load(self, project: Project, template_id: str) -> ProjectTemplate:
        """
        Seed the project from a template.

        Raises:
            NotFoundError: If the template id is unknown
        """
        template = self.catalog.get_template(template_id)
        if template is None:
            raise NotFoundError(f"Template not found: {template_id}", entity_type="template", entity_id=template_id)
        project.load_template(template)
        logger.info(f"Template '{template.name}' loaded ({len(project.phases)} phases)")
        return template
