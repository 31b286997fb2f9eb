"""
Record Storage Infrastructure Module

Interchangeable record stores: JSON files, MongoDB and SQL databases.
"""

from .base import Record, RecordStore, StoreConfig
from .json_store import JsonFileRecordStore
from .mongo_store import MongoRecordStore, close_clients
from .sql_store import SqlRecordStore
from .factory import RecordStoreFactory

__all__ = [
    'Record',
    'RecordStore',
    'StoreConfig',
    'JsonFileRecordStore',
    'MongoRecordStore',
    'SqlRecordStore',
    'RecordStoreFactory',
    'close_clients',
]
