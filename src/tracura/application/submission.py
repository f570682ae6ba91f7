"""
Tracura - Project Submission

Validates the project tree, serializes it into the submitted-project
document and writes it under the customer's projects document.
"""
import logging
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import Any

from tracura.application.draft_reconciler import DraftReconciler
from tracura.domain.dates import format_submission_date
from tracura.domain.exceptions import SubmissionBlockedError
from tracura.domain.interfaces import RemoteDocumentStore, projects_path
from tracura.domain.models.department import Department
from tracura.domain.models.line_item import LineItem
from tracura.domain.models.phase import Phase
from tracura.domain.models.project import Project
from tracura.domain.money import ZERO, to_decimal_string
from tracura.domain.validation import ProjectValidator

logger = logging.getLogger(__name__)

STATUS_IN_REVIEW = "IN_REVIEW"


def _line_item_document(line_item: LineItem) -> dict[str, Any]:
    return {
        "itemType": line_item.item_type,
        "item": line_item.item,
        "spec": line_item.spec,
        "uom": line_item.uom,
        "quantity": to_decimal_string(line_item.quantity),
        "unitPrice": to_decimal_string(line_item.unit_price),
        "total": to_decimal_string(line_item.total),
    }


def _department_document(department: Department) -> dict[str, Any]:
    return {
        "id": department.id,
        "name": department.trimmed_name,
        "contractorMode": department.contractor_mode.value,
        "totalBudget": to_decimal_string(department.amount),
        "lineItems": [_line_item_document(li) for li in department.line_items if not li.is_blank],
    }


def _submitted_departments(phase: Phase) -> list[Department]:
    return [d for d in phase.departments if d.is_named]


def _phase_document(phase: Phase) -> dict[str, Any]:
    departments = _submitted_departments(phase)
    return {
        "id": phase.id,
        "phaseNumber": phase.phase_number,
        "phaseName": phase.trimmed_name,
        "startDate": format_submission_date(phase.start_date),
        "endDate": format_submission_date(phase.end_date),
        "categories": list(phase.categories),
        "isEnabled": True,
        "budget": to_decimal_string(sum((d.amount for d in departments), ZERO)),
        "departments": [_department_document(d) for d in departments],
    }


def build_project_document(
    project: Project,
    project_id: str,
    now: datetime,
    existing: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Serialize a project for submission.

    Unnamed departments and blank line items are dropped. Amounts are
    2-place decimal strings, dates dd/MM/yyyy.

    Args:
        project: Validated project
        project_id: Id the project is stored under
        now: Submission timestamp
        existing: Previously submitted document (editing), whose
            estimatedBudget and createdAt are kept

    Returns:
        Submitted-project document
    """
    phases = [_phase_document(p) for p in project.phases]
    budget = sum(
        (d.amount for p in project.phases for d in _submitted_departments(p)),
        ZERO,
    )
    handover = format_submission_date(project.handover_date)
    document = {
        "id": project_id,
        "name": project.project_name.strip(),
        "description": project.description,
        "client": project.client,
        "location": project.location,
        "currency": project.currency,
        "budget": to_decimal_string(budget),
        "status": STATUS_IN_REVIEW,
        "plannedDate": format_submission_date(project.planned_date),
        "handoverDate": handover,
        "initialHandOverDate": handover,
        "maintenanceDate": format_submission_date(project.maintenance_date),
        "teamMembers": list(project.team_member_ids),
        "managerIds": [project.manager_id] if project.manager_id else [],
        "Allow_Template_Overrides": project.allow_template_overrides,
        "projectType": project.project_type,
        "attachmentURL": project.attachment_url,
        "attachmentName": project.attachment_name,
        "phases": phases,
        "updatedAt": now.isoformat(),
    }
    if existing is None:
        document["estimatedBudget"] = document["budget"]
        document["createdAt"] = now.isoformat()
    else:
        document["estimatedBudget"] = existing.get("estimatedBudget", document["budget"])
        document["createdAt"] = existing.get("createdAt", now.isoformat())
    return document


class ProjectSubmitter:
    """
    Final submission of a project tree.

    A RemoteUnavailable is fatal to the attempt; there is no automatic retry.
    """

    def __init__(
        self,
        store: RemoteDocumentStore,
        customer_id: str,
        *,
        validator: ProjectValidator | None = None,
        reconciler: DraftReconciler | None = None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        self.store = store
        self.customer_id = customer_id
        self.validator = validator or ProjectValidator()
        self.reconciler = reconciler
        self.clock = clock
        self.id_factory = id_factory

    def submit(self, project: Project, *, project_name_taken: bool = False) -> str:
        """
        Validate and submit.

        Args:
            project: Project to submit (not modified)
            project_name_taken: Last known result of the remote name check

        Returns:
            Id of the submitted project

        Raises:
            SubmissionBlockedError: If the tree has an invalid field
            RemoteUnavailable: If the store cannot be read or written
        """
        field_ref = self.validator.first_invalid_field(project, project_name_taken=project_name_taken)
        if field_ref is not None:
            raise SubmissionBlockedError(f"Cannot submit project: {field_ref.message}", field_ref=field_ref)

        path = projects_path(self.customer_id)
        existing = None
        if project.is_editing and project.editing_project_id:
            project_id = project.editing_project_id
            existing = (self.store.get_document(path) or {}).get(project_id)
        else:
            project_id = self.id_factory()

        document = build_project_document(project, project_id, self.clock(), existing)
        self.store.set_field(path, project_id, document)
        logger.info(f"Project submitted: {project_id} (budget={document['budget']}, phases={len(document['phases'])})")

        if self.reconciler is not None:
            self.reconciler.discard_after_submit()
        return project_id
