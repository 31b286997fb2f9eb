"""
Record endpoints

One router per school resource, all built from the resource registry:

    GET    /{resource}                 list all records
    GET    /{resource}/search?q=&field= substring search (case-insensitive)
    GET    /{resource}/name/{name}     search by name
    GET    /{resource}/{id}            fetch one record
    POST   /{resource}                 create
    PUT    /{resource}/{id}            full update
    DELETE /{resource}/{id}            delete
"""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request

from school_api.api.dependencies import get_record_service, render
from school_api.services.core import RecordService, ResourceDefinition


def build_record_router(resource: ResourceDefinition) -> APIRouter:
    """
    Create the CRUD router of a resource

    Args:
        resource: registry entry of the resource

    Returns:
        APIRouter: router mounted under /{resource.path}
    """
    router = APIRouter(prefix=f"/{resource.path}", tags=[resource.label + "s"])
    service_dependency = get_record_service(resource.path)
    label = resource.label.lower()

    @router.get("", name=f"list_{resource.path}")
    async def list_records(
            request: Request,
            service: RecordService = Depends(service_dependency),
    ):
        return render(request, service.list(), f"Fetched {label} list")

    @router.get("/search", name=f"search_{resource.path}")
    async def search_records(
            request: Request,
            q: str = Query(..., description="Text to look for, case-insensitive"),
            field: Optional[str] = Query(
                None,
                description=f"Field to search, defaults to {resource.default_search_field}",
            ),
            service: RecordService = Depends(service_dependency),
    ):
        return render(request, service.search(q, field), f"Found {label} records")

    if resource.has_name:
        @router.get("/name/{name}", name=f"search_{resource.path}_by_name")
        async def search_records_by_name(
                name: str,
                request: Request,
                service: RecordService = Depends(service_dependency),
        ):
            return render(request, service.search(name, "name"), f"Found {label} records")

    @router.get("/{record_id}", name=f"get_{resource.path}")
    async def get_record(
            record_id: str,
            request: Request,
            service: RecordService = Depends(service_dependency),
    ):
        return render(request, service.get(record_id), f"Fetched {label}")

    @router.post("", name=f"create_{resource.path}")
    async def create_record(
            request: Request,
            payload: Any = Body(...),
            service: RecordService = Depends(service_dependency),
    ):
        return render(request, service.create(payload), f"Created {label}")

    @router.put("/{record_id}", name=f"update_{resource.path}")
    async def update_record(
            record_id: str,
            request: Request,
            payload: Any = Body(...),
            service: RecordService = Depends(service_dependency),
    ):
        return render(request, service.update(record_id, payload), f"Updated {label}")

    @router.delete("/{record_id}", name=f"delete_{resource.path}")
    async def delete_record(
            record_id: str,
            request: Request,
            service: RecordService = Depends(service_dependency),
    ):
        return render(request, service.delete(record_id), f"Deleted {label}")

    return router
