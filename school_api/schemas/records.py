from datetime import datetime
from typing import ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Column sizes of the relational tables (school_api.models.records)
NAME_MAX = 255
SHORT_MAX = 64
AGE_MAX = 150


class RecordPayload(BaseModel):
    """
    Base request model for record create / full update

    required_messages maps a required field to the message reported when
    it is missing from a payload.
    """
    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    required_messages: ClassVar[Dict[str, str]] = {}


class TeacherPayload(RecordPayload):
    name: str = Field(..., max_length=NAME_MAX, description="Teacher name")
    school_disciplines: str = Field(..., max_length=NAME_MAX, description="Discipline(s) the teacher teaches")
    contact: str = Field(..., max_length=NAME_MAX, description="Contact e-mail")
    phone_number: str = Field(..., max_length=SHORT_MAX, description="Phone number")
    status: bool = Field(..., description="Whether the teacher is currently teaching")

    required_messages: ClassVar[Dict[str, str]] = {
        "name": "Teacher must have a name",
        "school_disciplines": "Teacher must have at least one school discipline",
        "contact": "Teacher must have a contact e-mail",
        "phone_number": "Teacher must have a phone number",
        "status": "Teacher must have a status",
    }


class StudentPayload(RecordPayload):
    name: str = Field(..., max_length=NAME_MAX, description="Student name")
    age: int = Field(..., ge=0, le=AGE_MAX, description="Student age")
    phone_number: str = Field(..., max_length=SHORT_MAX, description="Phone number")
    status: bool = Field(..., description="Whether the student is attending classes")
    parents: Optional[str] = Field(None, max_length=NAME_MAX, description="Parents or guardians")

    required_messages: ClassVar[Dict[str, str]] = {
        "name": "Student must have a name",
        "age": "Student must have an age",
        "phone_number": "Student must have a phone number",
        "status": "Student must have a status",
    }


class ProfessionalPayload(RecordPayload):
    name: str = Field(..., max_length=NAME_MAX, description="Professional name")
    specialty: str = Field(..., max_length=NAME_MAX, description="Specialty")
    email: str = Field(..., max_length=NAME_MAX, description="E-mail")
    phone_number: str = Field(..., max_length=SHORT_MAX, description="Phone number")
    status: bool = Field(..., description="Whether the professional is active")

    required_messages: ClassVar[Dict[str, str]] = {
        "name": "Professional must have a name",
        "specialty": "Professional must have a specialty",
        "email": "Professional must have an e-mail",
        "phone_number": "Professional must have a phone number",
        "status": "Professional must have a status",
    }


class EventPayload(RecordPayload):
    description: str = Field(..., description="Event description")
    date: datetime = Field(..., description="Event date and time")
    comments: str = Field(..., description="Comments about the event")

    required_messages: ClassVar[Dict[str, str]] = {
        "description": "Event must have a description",
        "date": "Event must have a date",
        "comments": "Event must have comments",
    }


class AppointmentPayload(RecordPayload):
    specialty: str = Field(..., max_length=NAME_MAX, description="Specialty of the appointment")
    comments: str = Field(..., description="Comments")
    date: datetime = Field(..., description="Appointment date and time")
    student: str = Field(..., max_length=NAME_MAX, description="Student name")
    professional: str = Field(..., max_length=NAME_MAX, description="Professional name")

    required_messages: ClassVar[Dict[str, str]] = {
        "specialty": "Appointment must have a specialty",
        "comments": "Appointment must have comments",
        "date": "Appointment must have a date",
        "student": "Appointment must have a student",
        "professional": "Appointment must have a professional",
    }


class UserPayload(RecordPayload):
    name: str = Field(..., max_length=NAME_MAX, description="User full name")
    email: str = Field(..., max_length=NAME_MAX, description="E-mail")
    user: str = Field(..., max_length=NAME_MAX, description="Login name")
    level: str = Field(..., max_length=SHORT_MAX, description="Privilege level")
    status: bool = Field(..., description="Whether the account is active")
    password: Optional[str] = Field(None, description="Plain password, stored hashed")

    required_messages: ClassVar[Dict[str, str]] = {
        "name": "User name field is empty. Please fill it in to continue",
        "email": "User email field is empty. Please fill it in to continue",
        "user": "User login field is empty. Please fill it in to continue",
        "level": "User level field is empty. Please fill it in to continue",
        "status": "User status field is empty. Please fill it in to continue",
    }
