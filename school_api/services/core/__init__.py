"""
Core Services Module

Provides the CRUD record service shared by every school resource,
the resource registry and payload validation.
"""

from .record_service import RecordService
from .registry import build_record_services
from .resources import RESOURCES, ResourceDefinition
from .validation import RecordValidationError, validate_payload

__all__ = [
    "RecordService",
    "build_record_services",
    "RESOURCES",
    "ResourceDefinition",
    "RecordValidationError",
    "validate_payload",
]
