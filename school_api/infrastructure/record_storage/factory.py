"""
Record store factory
"""
from typing import Type
import logging

from .base import RecordStore, StoreConfig
from .json_store import JsonFileRecordStore
from .mongo_store import MongoRecordStore
from .sql_store import SqlRecordStore

logger = logging.getLogger(__name__)


class RecordStoreFactory:
    """Factory for record store adapters"""

    _adapters = {
        "json": JsonFileRecordStore,
        "mongo": MongoRecordStore,
        "sql": SqlRecordStore,
    }

    @classmethod
    def create(cls, adapter_type: str, config: StoreConfig, connect: bool = True) -> RecordStore:
        """
        Create a record store adapter

        Args:
            adapter_type: backend name (json, mongo, sql)
            config: store configuration for one resource
            connect: call connect() before returning

        Returns:
            RecordStore: the adapter instance

        Raises:
            ValueError: unsupported adapter type or incomplete configuration
            StorageError: the store could not be connected
        """
        adapter_type = adapter_type.lower()
        if adapter_type not in cls._adapters:
            raise ValueError(f"Unsupported storage backend: {adapter_type}")

        store = cls._adapters[adapter_type](config)
        if connect:
            store.connect()
        logger.info(f"Created {adapter_type} record store for {config.resource}")
        return store

    @classmethod
    def register_adapter(cls, name: str, adapter_class: Type[RecordStore]):
        """
        Register a new adapter type

        Args:
            name: backend name used in configuration
            adapter_class: class implementing RecordStore
        """
        if not issubclass(adapter_class, RecordStore):
            raise ValueError("Adapter class must implement RecordStore")

        cls._adapters[name.lower()] = adapter_class
        logger.info(f"Registered record store adapter: {name}")

    @classmethod
    def get_supported_adapters(cls) -> list:
        """Names of the registered adapter types"""
        return list(cls._adapters.keys())
