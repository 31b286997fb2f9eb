"""
Record Store Abstract Base Classes

Defines the contract every record store implementation follows, so a
resource can move between a JSON file, MongoDB and a SQL database by
configuration alone.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


@dataclass
class StoreConfig:
    """Configuration for one resource's record store"""
    resource: str

    # File-backed store
    data_dir: str = "data"

    # Document store
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "school_admin"
    mongo_timeout_ms: int = 5000

    # Relational store
    database_uri: Optional[str] = None
    model: Optional[type] = None


class RecordStore(ABC):
    """
    Abstract interface for record storage operations

    Records are flat dicts carrying a string "id". The store never
    generates identifiers; callers insert records that already have one.
    """

    def __init__(self, config: StoreConfig):
        self.config = config

    @property
    def resource(self) -> str:
        return self.config.resource

    @abstractmethod
    def connect(self) -> None:
        """
        Prepare the backing storage (load file, create tables, ...)

        Raises:
            StorageError: storage is unreachable or unreadable
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release connections and handles"""
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Check the backing storage is reachable"""
        pass

    @abstractmethod
    def list_records(self) -> List[Record]:
        """All records, in storage order"""
        pass

    @abstractmethod
    def get_record(self, record_id: str) -> Record:
        """
        Fetch one record by identifier

        Raises:
            RecordNotFoundError: no record with this id
        """
        pass

    @abstractmethod
    def search_records(self, field: str, term: str) -> List[Record]:
        """
        Records whose field contains term, ignoring case

        Args:
            field: record field to match on
            term: substring to look for
        """
        pass

    @abstractmethod
    def insert_record(self, record: Record) -> Record:
        """
        Persist a new record

        Args:
            record: complete record including its id

        Returns:
            The stored record
        """
        pass

    @abstractmethod
    def update_record(self, record_id: str, record: Record) -> Record:
        """
        Replace every field of an existing record except its id

        Raises:
            RecordNotFoundError: no record with this id
        """
        pass

    @abstractmethod
    def delete_record(self, record_id: str) -> Record:
        """
        Remove a record

        Returns:
            The removed record

        Raises:
            RecordNotFoundError: no record with this id
        """
        pass
