"""
API Dependencies

Provides dependency injection for the per-resource record services
created at application start-up.
"""

from typing import Any, Callable

from fastapi import Request

from school_api.infrastructure.response import standard_response
from school_api.services.core import RecordService


def get_record_service(resource_path: str) -> Callable[[Request], RecordService]:
    """
    Build a dependency returning the record service of one resource

    Args:
        resource_path: resource key, e.g. "teachers"

    Returns:
        Callable: FastAPI dependency
    """

    def dependency(request: Request) -> RecordService:
        return request.app.state.record_services[resource_path]

    return dependency


def render(request: Request, data: Any, msg: str = "OK") -> Any:
    """
    Shape a success body

    Bare data by default; the standard envelope when WRAP_RESPONSES is on.
    """
    if request.app.state.settings.WRAP_RESPONSES:
        return standard_response(data=data, msg=msg)
    return data
