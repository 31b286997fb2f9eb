from typing import Dict, Any

from sqlalchemy import Column, VARCHAR, TEXT, INT, Boolean

from school_api.db.base import Base


class RecordMixin:
    """
    Row <-> record conversion shared by every record table

    Records are flat dicts whose keys match the column names.
    """

    @classmethod
    def field_names(cls):
        return [column.name for column in cls.__table__.columns if column.name != "id"]

    @classmethod
    def from_record(cls, record: Dict[str, Any]):
        row = cls(id=record["id"])
        row.apply(record)
        return row

    def apply(self, record: Dict[str, Any]) -> None:
        """Overwrite every non-id column from a record; absent keys become NULL."""
        for name in self.field_names():
            setattr(self, name, record.get(name))

    def to_dict(self) -> Dict[str, Any]:
        result = {"id": self.id}
        for name in self.field_names():
            result[name] = getattr(self, name)
        return result


class Teacher(RecordMixin, Base):
    """Teachers and the disciplines they teach"""
    __tablename__ = "t_teacher"

    id = Column(VARCHAR(36), primary_key=True, index=True)
    name = Column(VARCHAR(255), nullable=False)
    school_disciplines = Column(VARCHAR(255), nullable=False)
    contact = Column(VARCHAR(255), nullable=False)
    phone_number = Column(VARCHAR(64), nullable=False)
    status = Column(Boolean, nullable=False)


class Student(RecordMixin, Base):
    """Enrolled students"""
    __tablename__ = "t_student"

    id = Column(VARCHAR(36), primary_key=True, index=True)
    name = Column(VARCHAR(255), nullable=False)
    age = Column(INT, nullable=False)
    phone_number = Column(VARCHAR(64), nullable=False)
    status = Column(Boolean, nullable=False)
    parents = Column(VARCHAR(255), nullable=True)


class Professional(RecordMixin, Base):
    """Support professionals (psychologists, speech therapists, ...)"""
    __tablename__ = "t_professional"

    id = Column(VARCHAR(36), primary_key=True, index=True)
    name = Column(VARCHAR(255), nullable=False)
    specialty = Column(VARCHAR(255), nullable=False)
    email = Column(VARCHAR(255), nullable=False)
    phone_number = Column(VARCHAR(64), nullable=False)
    status = Column(Boolean, nullable=False)


class Event(RecordMixin, Base):
    """School calendar events"""
    __tablename__ = "t_event"

    id = Column(VARCHAR(36), primary_key=True, index=True)
    description = Column(TEXT, nullable=False)
    # ISO 8601 text so the original offset suffix survives a round trip
    date = Column(VARCHAR(64), nullable=False)
    comments = Column(TEXT, nullable=False)


class Appointment(RecordMixin, Base):
    """
    Appointment between a student and a professional

    Both parties are referenced by name only.
    """
    __tablename__ = "t_appointment"

    id = Column(VARCHAR(36), primary_key=True, index=True)
    specialty = Column(VARCHAR(255), nullable=False)
    comments = Column(TEXT, nullable=False)
    date = Column(VARCHAR(64), nullable=False)
    student = Column(VARCHAR(255), nullable=False)
    professional = Column(VARCHAR(255), nullable=False)


class User(RecordMixin, Base):
    """Application users"""
    __tablename__ = "t_user"

    id = Column(VARCHAR(36), primary_key=True, index=True)
    name = Column(VARCHAR(255), nullable=False)
    email = Column(VARCHAR(255), nullable=False)
    user = Column(VARCHAR(255), nullable=False)
    level = Column(VARCHAR(64), nullable=False)
    status = Column(Boolean, nullable=False)
    password = Column(VARCHAR(255), nullable=True)  # bcrypt hash
