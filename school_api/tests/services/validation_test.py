import pytest

from school_api.schemas.records import EventPayload, StudentPayload, TeacherPayload
from school_api.services.core.validation import RecordValidationError, is_missing, required_fields, validate_payload


def test_required_fields_follow_declaration_order():
    assert required_fields(StudentPayload) == ["name", "age", "phone_number", "status"]


@pytest.mark.parametrize("value,missing", [
    (None, True),
    ("", True),
    ("  ", True),
    (False, False),
    (0, False),
    ("x", False),
])
def test_is_missing(value, missing):
    assert is_missing(value) is missing


def test_first_missing_field_message():
    with pytest.raises(RecordValidationError) as excinfo:
        validate_payload(TeacherPayload, {"name": "Mateus", "contact": "m@school.net"})
    assert excinfo.value.field == "school_disciplines"
    assert excinfo.value.message == "Teacher must have at least one school discipline"


def test_type_errors_name_the_field():
    with pytest.raises(RecordValidationError) as excinfo:
        validate_payload(StudentPayload, {"name": "Victor", "age": -1, "phone_number": "1", "status": True})
    assert excinfo.value.field == "age"
    assert excinfo.value.message.startswith("Invalid value for 'age'")


def test_returns_json_ready_fields_without_id():
    fields = validate_payload(EventPayload, {
        "id": "ignored",
        "description": "  Staff sync  ",
        "date": "2024-05-20T14:30:00Z",
        "comments": "Q2 goals",
        "extra": 1,
    })
    assert fields == {
        "description": "Staff sync",
        "date": "2024-05-20T14:30:00Z",
        "comments": "Q2 goals",
    }


def test_optional_fields_default_to_none():
    fields = validate_payload(StudentPayload, {"name": "Victor", "age": "6", "phone_number": "1", "status": "on"})
    assert fields == {"name": "Victor", "age": 6, "phone_number": "1", "status": True, "parents": None}


@pytest.mark.parametrize("payload", [None, [], "text", 3])
def test_payload_must_be_an_object(payload):
    with pytest.raises(RecordValidationError):
        validate_payload(EventPayload, payload)


@pytest.mark.parametrize("sent,stored", [
    ("2024-05-20T14:30:00Z", "2024-05-20T14:30:00Z"),
    ("2024-05-20T14:30:00+00:00", "2024-05-20T14:30:00Z"),
    ("2024-05-20T14:30:00.000Z", "2024-05-20T14:30:00Z"),
    ("2024-05-20", "2024-05-20T00:00:00"),
])
def test_dates_are_stored_in_normalised_iso_form(sent, stored):
    fields = validate_payload(EventPayload, {"description": "Staff sync", "date": sent, "comments": "Q2"})
    assert fields["date"] == stored


def test_age_upper_bound():
    with pytest.raises(RecordValidationError) as excinfo:
        validate_payload(StudentPayload, {"name": "Victor", "age": 10 ** 20, "phone_number": "1", "status": True})
    assert excinfo.value.field == "age"
