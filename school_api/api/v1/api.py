from fastapi import APIRouter

from school_api.api.v1.endpoints.records import build_record_router
from school_api.services.core import RESOURCES


api_router = APIRouter()

# One router per resource, prefixed with its path
for resource in RESOURCES.values():
    api_router.include_router(build_record_router(resource))
