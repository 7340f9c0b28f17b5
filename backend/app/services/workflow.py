"""
Factura submission workflow.

Idle -> Validating -> Submitting -> ExtractingDocument -> Done, with Failed
reachable from every step. Each run is a single attempt; the admin resubmits
to try again.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

from app.exceptions import SolariaAPIException, ValidationError
from app.models.admin import AdminSession
from app.models.document import DecodedInvoiceDocument
from app.services.document_extractor import extract_document
from app.services.factura_client import FacturaAPIClient
from app.services.form_validator import validate_customer_request
from app.utils.logger import get_logger

logger = get_logger(__name__)


class WorkflowState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    EXTRACTING_DOCUMENT = "extracting_document"
    DONE = "done"
    FAILED = "failed"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Notification:
    """Transient message shown to the admin."""

    level: NotificationLevel
    message: str

    def to_dict(self) -> dict:
        return {"level": self.level.value, "message": self.message}


@dataclass
class WorkflowResult:
    state: WorkflowState
    notification: Notification
    document: Optional[DecodedInvoiceDocument] = None
    error: Optional[SolariaAPIException] = None
    failed_at: Optional[WorkflowState] = None

    @property
    def succeeded(self) -> bool:
        return self.state is WorkflowState.DONE

    @property
    def reason(self) -> Optional[str]:
        return str(self.error.detail) if self.error else None


@dataclass
class FacturaWorkflow:
    """
    One factura submission.

    Instances are single-use: run() may be called once.
    """

    client: FacturaAPIClient
    admin: Optional[AdminSession] = None
    state: WorkflowState = WorkflowState.IDLE
    history: list[WorkflowState] = field(default_factory=lambda: [WorkflowState.IDLE])

    def _transition(self, state: WorkflowState) -> None:
        self.state = state
        self.history.append(state)

    def _fail(self, error: SolariaAPIException) -> WorkflowResult:
        failed_at = self.state
        self._transition(WorkflowState.FAILED)
        logger.warning(
            "Factura workflow failed",
            step=failed_at.value,
            error_type=type(error).__name__,
            reason=str(error.detail),
        )
        return WorkflowResult(
            state=WorkflowState.FAILED,
            notification=Notification(NotificationLevel.ERROR, str(error.detail)),
            error=error,
            failed_at=failed_at,
        )

    def run(self, form: Mapping[str, Any], transaction_id: Any) -> WorkflowResult:
        """
        Validate, submit and extract.

        Domain errors end the run in FAILED with an error notification;
        they are never raised to the caller.
        """
        if self.state is not WorkflowState.IDLE:
            raise RuntimeError(f"Workflow already ran (state: {self.state.value})")

        try:
            self._transition(WorkflowState.VALIDATING)
            request = validate_customer_request(form)

            self._transition(WorkflowState.SUBMITTING)
            body = self.client.send_factura(request, transaction_id, admin=self.admin)

            self._transition(WorkflowState.EXTRACTING_DOCUMENT)
            document = extract_document(body)
        except SolariaAPIException as e:
            return self._fail(e)

        self._transition(WorkflowState.DONE)
        message = body.get("message") if isinstance(body, dict) else None
        return WorkflowResult(
            state=WorkflowState.DONE,
            notification=Notification(
                NotificationLevel.SUCCESS,
                message or f"XML guardado como '{document.filename}'",
            ),
            document=document,
        )


def failure_payload(result: WorkflowResult) -> dict:
    """JSON body describing a failed run."""
    payload = {
        "error": result.reason,
        "type": type(result.error).__name__,
        "state": result.state.value,
        "failed_at": result.failed_at.value if result.failed_at else None,
        "notification": result.notification.to_dict(),
    }
    if isinstance(result.error, ValidationError):
        payload["errors"] = result.error.errors
    return payload
