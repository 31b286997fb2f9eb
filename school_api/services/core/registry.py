import logging
from typing import Dict

from school_api.core.config import Settings
from school_api.infrastructure.record_storage import RecordStoreFactory, StoreConfig
from school_api.services.core.record_service import RecordService
from school_api.services.core.resources import RESOURCES, ResourceDefinition

logger = logging.getLogger(__name__)


def store_config_for(resource: ResourceDefinition, settings: Settings) -> StoreConfig:
    """Store configuration for a resource, taken from application settings"""
    return StoreConfig(
        resource=resource.path,
        data_dir=settings.DATA_DIR,
        mongo_uri=settings.MONGO_URI,
        mongo_db_name=settings.MONGO_DB_NAME,
        mongo_timeout_ms=settings.MONGO_TIMEOUT_MS,
        database_uri=settings.SQLALCHEMY_DATABASE_URI,
        model=resource.model,
    )


def build_record_services(settings: Settings) -> Dict[str, RecordService]:
    """
    Create and connect one record service per registered resource

    Args:
        settings: application settings; STORAGE_BACKEND and
            STORAGE_BACKEND_OVERRIDES pick the adapter per resource

    Returns:
        Dict[str, RecordService]: services keyed by resource path

    Raises:
        StorageError: a store could not be connected
    """
    unknown = set(settings.STORAGE_BACKEND_OVERRIDES) - set(RESOURCES)
    if unknown:
        logger.warning(f"Ignoring storage overrides for unknown resources: {sorted(unknown)}")

    services = {}
    for path, resource in RESOURCES.items():
        backend = settings.backend_for(path)
        store = RecordStoreFactory.create(backend, store_config_for(resource, settings))
        services[path] = RecordService(resource, store)
    return services
