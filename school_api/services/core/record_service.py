import logging
from typing import Any, Dict, List, Optional

from school_api.infrastructure.exceptions import RecordNotFoundError
from school_api.infrastructure.record_storage import Record, RecordStore
from school_api.services.core.resources import ResourceDefinition
from school_api.services.core.validation import RecordValidationError, validate_payload
from school_api.utils.ids import generate_record_id

logger = logging.getLogger(__name__)


class RecordService:
    """
    CRUD operations for one resource

    Validates payloads against the resource schema, assigns identifiers
    and delegates persistence to the configured record store. Errors from
    the store propagate unchanged, except that a missing id is reported
    with the resource's own not-found message.
    """

    def __init__(self, resource: ResourceDefinition, store: RecordStore):
        self.resource = resource
        self.store = store

    @property
    def not_found_message(self) -> str:
        return f"{self.resource.label} not found"

    def _present(self, record: Record) -> Record:
        """Strip write-only fields before a record leaves the service"""
        return {
            key: value
            for key, value in record.items()
            if key not in self.resource.write_only_fields
        }

    def _fetch(self, record_id: str) -> Record:
        try:
            return self.store.get_record(record_id)
        except RecordNotFoundError:
            raise RecordNotFoundError(self.not_found_message)

    def _build(self, record_id: str, payload: Any, existing: Optional[Record] = None) -> Record:
        fields = validate_payload(self.resource.schema, payload)
        record = {"id": record_id, **fields}
        if self.resource.before_save is not None:
            record = self.resource.before_save(record, existing)
        return record

    def list(self) -> List[Record]:
        return [self._present(record) for record in self.store.list_records()]

    def get(self, record_id: str) -> Record:
        return self._present(self._fetch(record_id))

    def search(self, term: str, field: Optional[str] = None) -> List[Record]:
        """
        Case-insensitive substring search on one text field

        Raises:
            RecordValidationError: field is not searchable or term is blank
            RecordNotFoundError: nothing matched
        """
        field = field or self.resource.default_search_field
        if field not in self.resource.searchable_fields:
            raise RecordValidationError(
                f"Field '{field}' cannot be searched; use one of: "
                + ", ".join(self.resource.searchable_fields),
                field=field,
            )
        if term is None or not term.strip():
            raise RecordValidationError("Search term must not be empty", field=field)

        matches = self.store.search_records(field, term.strip())
        if not matches:
            raise RecordNotFoundError(f"No {self.resource.label.lower()} found")
        return [self._present(record) for record in matches]

    def create(self, payload: Dict[str, Any]) -> Record:
        record = self._build(generate_record_id(), payload)
        stored = self.store.insert_record(record)
        logger.info(f"Created {self.resource.label.lower()} {stored['id']}")
        return self._present(stored)

    def update(self, record_id: str, payload: Dict[str, Any]) -> Record:
        existing = self._fetch(record_id)
        record = self._build(record_id, payload, existing)
        try:
            stored = self.store.update_record(record_id, record)
        except RecordNotFoundError:
            raise RecordNotFoundError(self.not_found_message)
        logger.info(f"Updated {self.resource.label.lower()} {record_id}")
        return self._present(stored)

    def delete(self, record_id: str) -> Record:
        try:
            removed = self.store.delete_record(record_id)
        except RecordNotFoundError:
            raise RecordNotFoundError(self.not_found_message)
        logger.info(f"Deleted {self.resource.label.lower()} {record_id}")
        return self._present(removed)
