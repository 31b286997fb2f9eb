from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import sys
import traceback
from typing import Optional

from school_api.api.v1.api import api_router
from school_api.core.config import Settings, settings as default_settings
from school_api.db.base import dispose_engines
from school_api.infrastructure.exceptions import InfrastructureError
from school_api.infrastructure.record_storage import close_clients
from school_api.infrastructure.response import standard_response, error_response
from school_api.services.core import RecordValidationError, build_record_services

# Keep the reloader quiet
logging.getLogger('watchfiles').setLevel(logging.ERROR)
logging.getLogger('watchfiles.main').setLevel(logging.ERROR)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def _error(status_code: int, msg: str) -> JSONResponse:
    return JSONResponse(
        content=error_response(msg=msg, code=status_code),
        status_code=status_code,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the error taxonomy to HTTP statuses

    RecordValidationError -> 400, RecordNotFoundError -> 404,
    StorageError -> 500. Bodies use the standard error envelope.
    """

    @app.exception_handler(RecordValidationError)
    async def validation_error_handler(request: Request, exc: RecordValidationError):
        logger.info(f"Rejected {request.method} {request.url.path}: {exc.message}")
        return _error(exc.status_code, exc.message)

    @app.exception_handler(InfrastructureError)
    async def infrastructure_error_handler(request: Request, exc: InfrastructureError):
        if exc.status_code >= 500:
            logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.message}")
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = errors[0].get("msg", "invalid request") if errors else "invalid request"
        return _error(400, f"Invalid request: {detail}")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
        logger.error(traceback.format_exc())
        return _error(500, "Internal server error")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application

    Record stores are created and connected here, so a misconfigured
    backend fails start-up instead of the first request.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.VERSION,
        description="School administration API: teachers, students, professionals, "
                    "events, appointments and users",
    )
    app.state.settings = app_settings
    app.state.record_services = build_record_services(app_settings)

    register_exception_handlers(app)
    app.include_router(api_router, prefix=app_settings.API_PREFIX)

    @app.on_event("startup")
    async def check_storage():
        """
        Report storage reachability; the application keeps running either way
        """
        for path, service in app.state.record_services.items():
            backend = app_settings.backend_for(path)
            if service.store.ping():
                logger.info(f"{path}: {backend} storage ready")
            else:
                logger.warning(f"{path}: {backend} storage unreachable, requests will fail until it is back")

    @app.on_event("shutdown")
    async def close_storage():
        for service in app.state.record_services.values():
            service.store.disconnect()
        close_clients()
        dispose_engines()
        logger.info("Record stores closed")

    @app.get("/")
    async def root():
        """Health check"""
        return standard_response(
            data={
                "status": "online",
                "version": app_settings.VERSION,
                "storage": {
                    path: app_settings.backend_for(path)
                    for path in app.state.record_services
                },
            },
            msg=f"{app_settings.PROJECT_NAME} is running"
        )

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("school_api.main:create_app", factory=True, host="0.0.0.0", port=8080, reload=True)
