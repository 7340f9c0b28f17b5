"""Tests for the structured logging processors."""

from app.utils.logger import add_severity_level, drop_color_message_key, redact_personal_data


def test_personal_data_is_masked():
    event = redact_personal_data(None, "info", {
        "event": "Factura request accepted",
        "transaction_id": "abc123",
        "email": "maria.rodriguez@gmail.com",
        "identification_number": "112340567",
    })
    assert event["email"] == "***"
    assert event["identification_number"] == "***"
    assert event["transaction_id"] == "abc123"


def test_severity_for_cloud_logging():
    assert add_severity_level(None, "warning", {"level": "warning"})["severity"] == "WARNING"
    assert add_severity_level(None, "msg", {})["severity"] == "DEFAULT"


def test_uvicorn_color_message_dropped():
    assert "color_message" not in drop_color_message_key(None, "info", {"color_message": "x", "event": "y"})
