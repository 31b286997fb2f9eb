"""
Resource registry

Everything that differs between teachers, students, professionals,
events, appointments and users lives here; the service, stores and
routers are shared.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Type

import bcrypt

from school_api.infrastructure.record_storage import Record
from school_api.models import records as tables
from school_api.schemas.records import (
    AppointmentPayload,
    EventPayload,
    ProfessionalPayload,
    RecordPayload,
    StudentPayload,
    TeacherPayload,
    UserPayload,
)
from school_api.services.core.validation import RecordValidationError

# Called with the validated record and the stored one (None on create)
BeforeSave = Callable[[Record, Optional[Record]], Record]

BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class ResourceDefinition:
    path: str
    label: str
    schema: Type[RecordPayload]
    model: type
    default_search_field: str
    write_only_fields: Tuple[str, ...] = ()
    before_save: Optional[BeforeSave] = None

    @property
    def searchable_fields(self) -> Tuple[str, ...]:
        """Text fields that can be searched by substring"""
        return tuple(
            name
            for name, field in self.schema.model_fields.items()
            if field.annotation in (str, Optional[str]) and name not in self.write_only_fields
        )

    @property
    def has_name(self) -> bool:
        return "name" in self.schema.model_fields


def hash_password(password: str) -> str:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise RecordValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes", field="password")
    return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")


def hash_user_password(record: Record, existing: Optional[Record]) -> Record:
    """
    Replace a plain password with its bcrypt hash

    A full update without a password keeps the stored hash.
    """
    password = record.get("password")
    if password:
        record["password"] = hash_password(password)
    elif existing is not None and existing.get("password"):
        record["password"] = existing["password"]
    else:
        record["password"] = None
    return record


RESOURCES: Dict[str, ResourceDefinition] = {
    resource.path: resource
    for resource in (
        ResourceDefinition(
            path="teachers",
            label="Teacher",
            schema=TeacherPayload,
            model=tables.Teacher,
            default_search_field="name",
        ),
        ResourceDefinition(
            path="students",
            label="Student",
            schema=StudentPayload,
            model=tables.Student,
            default_search_field="name",
        ),
        ResourceDefinition(
            path="professionals",
            label="Professional",
            schema=ProfessionalPayload,
            model=tables.Professional,
            default_search_field="name",
        ),
        ResourceDefinition(
            path="events",
            label="Event",
            schema=EventPayload,
            model=tables.Event,
            default_search_field="description",
        ),
        ResourceDefinition(
            path="appointments",
            label="Appointment",
            schema=AppointmentPayload,
            model=tables.Appointment,
            default_search_field="student",
        ),
        ResourceDefinition(
            path="users",
            label="User",
            schema=UserPayload,
            model=tables.User,
            default_search_field="name",
            write_only_fields=("password",),
            before_save=hash_user_password,
        ),
    )
}
