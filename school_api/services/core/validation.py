"""
Declarative payload validation

One pass per request: presence of required fields in declaration order,
then the pydantic schema for types.
"""
from typing import Any, Dict, Type

from pydantic import ValidationError

from school_api.schemas.records import RecordPayload


class RecordValidationError(ValueError):
    """A payload is missing a required field or carries an invalid value."""

    status_code = 400

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.message = message
        self.field = field


def is_missing(value: Any) -> bool:
    """Absent, null and blank strings count as missing; False and 0 do not."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def required_fields(schema: Type[RecordPayload]):
    return [name for name, field in schema.model_fields.items() if field.is_required()]


def validate_payload(schema: Type[RecordPayload], payload: Any) -> Dict[str, Any]:
    """
    Validate a request payload against a record schema

    Args:
        schema: pydantic model of the resource
        payload: decoded JSON body

    Returns:
        Dict[str, Any]: JSON-ready record fields without an id

    Raises:
        RecordValidationError: first missing field, or first invalid value
    """
    if not isinstance(payload, dict):
        raise RecordValidationError("Request body must be a JSON object")

    for name in required_fields(schema):
        if is_missing(payload.get(name)):
            message = schema.required_messages.get(name, f"Field '{name}' is required")
            raise RecordValidationError(message, field=name)

    try:
        model = schema.model_validate(payload)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error.get("loc", ())) or None
        raise RecordValidationError(f"Invalid value for '{field}': {error['msg']}", field=field)

    return model.model_dump(mode="json")
