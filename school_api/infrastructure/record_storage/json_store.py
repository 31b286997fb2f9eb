"""
File-backed record store

The whole collection lives in memory as a list and is rewritten to
<data_dir>/<resource>.json after every mutation.
"""
import copy
import json
import logging
import os
import tempfile
from typing import List

from ..exceptions import RecordNotFoundError, StorageError
from .base import Record, RecordStore, StoreConfig

logger = logging.getLogger(__name__)


class JsonFileRecordStore(RecordStore):
    """JSON array per resource, flushed synchronously on every write"""

    def __init__(self, config: StoreConfig):
        super().__init__(config)
        self.file_path = os.path.join(config.data_dir, f"{config.resource}.json")
        self._records: List[Record] = []
        self._loaded = False

    def connect(self) -> None:
        if not os.path.exists(self.file_path):
            logger.info(f"Creating empty collection file {self.file_path}")
            self._flush([])
            self._records = []
            self._loaded = True
            return

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to load {self.file_path}: {e}")

        if not isinstance(data, list):
            raise StorageError(f"Collection file {self.file_path} must hold a JSON array")

        self._records = data
        self._loaded = True
        logger.info(f"Loaded {len(data)} {self.resource} from {self.file_path}")

    def disconnect(self) -> None:
        self._loaded = False

    def ping(self) -> bool:
        return self._loaded and os.path.exists(self.file_path)

    def _flush(self, records: List[Record]) -> None:
        """Write the collection to a temporary file, then swap it in."""
        directory = os.path.dirname(os.path.abspath(self.file_path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=f".{self.resource}.", suffix=".tmp", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(records, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self.file_path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {self.file_path}: {e}")

    def _index_of(self, record_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.get("id") == record_id:
                return index
        raise RecordNotFoundError(f"No {self.resource} record with id {record_id}")

    def list_records(self) -> List[Record]:
        return copy.deepcopy(self._records)

    def get_record(self, record_id: str) -> Record:
        return copy.deepcopy(self._records[self._index_of(record_id)])

    def search_records(self, field: str, term: str) -> List[Record]:
        term = term.lower()
        return [
            copy.deepcopy(record)
            for record in self._records
            if record.get(field) is not None and term in str(record[field]).lower()
        ]

    def insert_record(self, record: Record) -> Record:
        if any(existing.get("id") == record["id"] for existing in self._records):
            raise StorageError(f"Duplicate {self.resource} id {record['id']}")

        records = self._records + [copy.deepcopy(record)]
        self._flush(records)
        self._records = records
        return copy.deepcopy(record)

    def update_record(self, record_id: str, record: Record) -> Record:
        index = self._index_of(record_id)
        stored = dict(copy.deepcopy(record), id=record_id)

        records = list(self._records)
        records[index] = stored
        self._flush(records)
        self._records = records
        return copy.deepcopy(stored)

    def delete_record(self, record_id: str) -> Record:
        index = self._index_of(record_id)

        records = list(self._records)
        removed = records.pop(index)
        self._flush(records)
        self._records = records
        return copy.deepcopy(removed)
