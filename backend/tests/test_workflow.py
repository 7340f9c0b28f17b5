"""Tests for the factura submission workflow state machine."""

import pytest
import requests

from app.exceptions import (
    DecodeError,
    InvalidReferenceError,
    MalformedDocumentError,
    MissingDocumentError,
    RequestFailedError,
    ValidationError,
)
from app.services.workflow import (
    FacturaWorkflow,
    NotificationLevel,
    WorkflowState,
    failure_payload,
)
from factura_fakes import VENDOR_PREFIX, make_factura_body, make_response

S = WorkflowState


@pytest.fixture
def workflow(factura_client, admin):
    return FacturaWorkflow(client=factura_client, admin=admin)


class TestHappyPath:

    def test_walks_every_state(self, workflow, fake_session, valid_form):
        fake_session.post.return_value = make_response(make_factura_body())

        result = workflow.run(valid_form, "abc123")

        assert result.succeeded
        assert result.document.filename == "factura_1234.xml"
        assert workflow.history == [S.IDLE, S.VALIDATING, S.SUBMITTING, S.EXTRACTING_DOCUMENT, S.DONE]
        assert result.error is None

    def test_success_notification_prefers_api_message(self, workflow, fake_session, valid_form):
        fake_session.post.return_value = make_response(make_factura_body(message="Factura enviada a Hacienda"))
        result = workflow.run(valid_form, "abc123")
        assert result.notification.level is NotificationLevel.SUCCESS
        assert result.notification.message == "Factura enviada a Hacienda"

    def test_default_success_notification(self, workflow, fake_session, valid_form):
        fake_session.post.return_value = make_response(make_factura_body())
        result = workflow.run(valid_form, "abc123")
        assert result.notification.message == "XML guardado como 'factura_1234.xml'"

    def test_single_use(self, workflow, fake_session, valid_form):
        fake_session.post.return_value = make_response(make_factura_body())
        workflow.run(valid_form, "abc123")
        with pytest.raises(RuntimeError):
            workflow.run(valid_form, "abc123")
        assert fake_session.post.call_count == 1


class TestFailures:
    """Every step can end in FAILED; nothing is raised and nothing is retried."""

    def test_validation(self, workflow, fake_session, valid_form):
        result = workflow.run({**valid_form, "identificationNumber": "12"}, "abc123")

        assert result.state is S.FAILED
        assert result.failed_at is S.VALIDATING
        assert isinstance(result.error, ValidationError)
        assert "identificationNumber" in result.error.errors
        fake_session.post.assert_not_called()

    @pytest.mark.parametrize("transaction_id", ["", None, 42])
    def test_invalid_reference(self, workflow, fake_session, valid_form, transaction_id):
        result = workflow.run(valid_form, transaction_id)

        assert result.failed_at is S.SUBMITTING
        assert isinstance(result.error, InvalidReferenceError)
        fake_session.post.assert_not_called()

    def test_request_failed(self, workflow, fake_session, valid_form):
        fake_session.post.side_effect = requests.ConnectionError("Connection reset")

        result = workflow.run(valid_form, "abc123")

        assert result.failed_at is S.SUBMITTING
        assert isinstance(result.error, RequestFailedError)
        assert result.notification.level is NotificationLevel.ERROR
        assert "Connection reset" in result.notification.message
        assert fake_session.post.call_count == 1

    @pytest.mark.parametrize("body, error_type", [
        ({"message": "ok"}, MissingDocumentError),
        ({"solaria": {"RespuestaXML": "short"}}, MalformedDocumentError),
        ({"solaria": {"RespuestaXML": VENDOR_PREFIX + "****"}}, DecodeError),
    ])
    def test_extraction(self, workflow, fake_session, valid_form, body, error_type):
        fake_session.post.return_value = make_response(body)

        result = workflow.run(valid_form, "abc123")

        assert result.failed_at is S.EXTRACTING_DOCUMENT
        assert isinstance(result.error, error_type)
        assert workflow.history[-1] is S.FAILED
        assert result.document is None

    def test_accepted_without_json_body(self, workflow, fake_session, valid_form):
        fake_session.post.return_value = make_response(content=b"", content_type="text/plain")

        result = workflow.run(valid_form, "abc123")

        assert result.failed_at is S.EXTRACTING_DOCUMENT
        assert isinstance(result.error, MissingDocumentError)
        assert result.notification.message.endswith("No se recibió RespuestaXML del API")
        assert fake_session.post.call_count == 1


def test_failure_payload_includes_field_errors(workflow, valid_form):
    result = workflow.run({**valid_form, "email": "nope"}, "abc123")
    payload = failure_payload(result)

    assert payload["type"] == "ValidationError"
    assert payload["state"] == "failed"
    assert payload["failed_at"] == "validating"
    assert payload["notification"] == {"level": "error", "message": "Invalid form data"}
    assert "email" in payload["errors"]
