"""
GeoBrasil - Punto de entrada FastAPI
API de geolocalización de municipios brasileños.

    uvicorn --factory app.main:create_app
"""
import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.middleware.cors import PermissiveCORSMiddleware
from app.middleware.request_logging import RequestLoggingMiddleware
from app.routers.health import router as health_router
from app.routers.locations import router as locations_router
from app.schemas.common import ErrorResponse
from app.services.geo.geo_base import GeoStoreBase
from app.services.geo.geo_factory import get_geo_store
from app.services.geo.geo_helper import with_timeout
from app.services.query_service import LocationQueryService

logger = logging.getLogger("main")


def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    body = ErrorResponse(error=HTTPStatus(status_code).phrase, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).description
    return _error_response(exc.status_code, message, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _error_response(400, "Parámetros inválidos")


def create_app(settings: Optional[Settings] = None, store: Optional[GeoStoreBase] = None) -> FastAPI:
    """
    Construye la app con su configuración y geo store.
    Sin store explícito se crea según GEO_STORE_BACKEND.
    """
    settings = settings or get_settings()
    store = store or get_geo_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Conecta el store y asegura los índices. Si falla, la app no arranca."""
        await store.connect()
        await with_timeout(store.ensure_geo_index(), settings.ADMIN_TIMEOUT_SECONDS, "ensure_geo_index")
        await with_timeout(store.ensure_text_index(), settings.ADMIN_TIMEOUT_SECONDS, "ensure_text_index")
        logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} iniciado")
        yield
        await store.close()
        logger.info(f"{settings.APP_NAME} detenido")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API de Geolocalización - Municipios de Brasil",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.query_service = LocationQueryService(store, settings)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # El último middleware agregado es el más externo
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(PermissiveCORSMiddleware)

    app.include_router(health_router)
    app.include_router(locations_router)

    return app
