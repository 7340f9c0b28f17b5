"""
Form validation for customer / factura requests.

Turns raw form values into a CustomerRequest or field-level error messages.
No side effects.
"""
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from app.exceptions import ValidationError
from app.models.customer import CustomerRequest


def _error_message(error: Mapping[str, Any]) -> str:
    # Messages raised from our own validators are shown as written
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error.get("msg", "Invalid value")


def collect_field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by form field name."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "__root__"
        errors.setdefault(field, []).append(_error_message(error))
    return errors


def validate_customer_request(form: Mapping[str, Any]) -> CustomerRequest:
    """
    Validate raw form values.

    Args:
        form: Field values as posted by the admin UI (camelCase keys)

    Returns:
        CustomerRequest: Validated, normalized request

    Raises:
        ValidationError: With a {field: [messages]} mapping
    """
    if not isinstance(form, Mapping):
        raise ValidationError({"__root__": ["Form data must be an object"]})
    try:
        return CustomerRequest.model_validate(dict(form))
    except PydanticValidationError as e:
        raise ValidationError(collect_field_errors(e)) from e
