"""
MongoDB record store

One collection per resource. The generated record id is used as the
document _id, so no ObjectId ever reaches the API.
"""
import logging
import re
from typing import Any, Dict, List, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..exceptions import RecordNotFoundError, StorageError
from .base import Record, RecordStore, StoreConfig

logger = logging.getLogger(__name__)

# Clients are shared by every resource pointing at the same server
_clients: Dict[str, MongoClient] = {}


def get_client(uri: str, timeout_ms: int) -> MongoClient:
    if uri not in _clients:
        # MongoClient connects lazily; nothing goes over the wire here
        _clients[uri] = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
    return _clients[uri]


def close_clients() -> None:
    for client in _clients.values():
        client.close()
    _clients.clear()


def serialize_doc(doc: Dict[str, Any]) -> Record:
    out = dict(doc)
    _id = out.pop("_id", None)
    return {"id": str(_id) if _id is not None else None, **out}


class MongoRecordStore(RecordStore):
    """Document store adapter; one round trip per operation, no retry"""

    def __init__(self, config: StoreConfig, collection: Optional[Collection] = None):
        super().__init__(config)
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            client = get_client(self.config.mongo_uri, self.config.mongo_timeout_ms)
            self._collection = client[self.config.mongo_db_name][self.resource]
        return self._collection

    def connect(self) -> None:
        # Touch the property so configuration errors surface at startup
        self.collection
        logger.info(f"Using MongoDB collection {self.config.mongo_db_name}.{self.resource}")

    def disconnect(self) -> None:
        self._collection = None

    def ping(self) -> bool:
        try:
            self.collection.database.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning(f"MongoDB ping failed for {self.resource}: {e}")
            return False

    @staticmethod
    def _to_doc(record: Record) -> Dict[str, Any]:
        doc = {key: value for key, value in record.items() if key != "id"}
        doc["_id"] = record["id"]
        return doc

    def list_records(self) -> List[Record]:
        try:
            return [serialize_doc(doc) for doc in self.collection.find()]
        except PyMongoError as e:
            raise StorageError(str(e))

    def get_record(self, record_id: str) -> Record:
        try:
            doc = self.collection.find_one({"_id": record_id})
        except PyMongoError as e:
            raise StorageError(str(e))
        if not doc:
            raise RecordNotFoundError(f"No {self.resource} record with id {record_id}")
        return serialize_doc(doc)

    def search_records(self, field: str, term: str) -> List[Record]:
        query = {field: {"$regex": re.escape(term), "$options": "i"}}
        try:
            return [serialize_doc(doc) for doc in self.collection.find(query)]
        except PyMongoError as e:
            raise StorageError(str(e))

    def insert_record(self, record: Record) -> Record:
        try:
            self.collection.insert_one(self._to_doc(record))
        except DuplicateKeyError:
            raise StorageError(f"Duplicate {self.resource} id {record['id']}")
        except PyMongoError as e:
            raise StorageError(str(e))
        return dict(record)

    def update_record(self, record_id: str, record: Record) -> Record:
        doc = self._to_doc(dict(record, id=record_id))
        try:
            result = self.collection.replace_one({"_id": record_id}, doc)
        except PyMongoError as e:
            raise StorageError(str(e))
        if result.matched_count == 0:
            raise RecordNotFoundError(f"No {self.resource} record with id {record_id}")
        return serialize_doc(doc)

    def delete_record(self, record_id: str) -> Record:
        try:
            doc = self.collection.find_one_and_delete({"_id": record_id})
        except PyMongoError as e:
            raise StorageError(str(e))
        if not doc:
            raise RecordNotFoundError(f"No {self.resource} record with id {record_id}")
        return serialize_doc(doc)
