"""
Service Factory Module

Builds the FastAPI application shell shared by the site services: CORS from
settings, a request log line per call and the ``/`` and ``/health`` endpoints.
"""

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from asal.config.settings import ApplicationSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceInfo:
    """Identity of a service, used for OpenAPI metadata and health payloads"""

    name: str
    title: str
    description: str
    version: str = "0.1.0"
    tags: List[Dict[str, str]] = field(default_factory=list)


def create_fastapi_service(
    service_info: ServiceInfo,
    custom_lifespan: Optional[Callable] = None,
    include_health_check: bool = True,
    include_logging_middleware: bool = True,
    app_settings: Optional[ApplicationSettings] = None,
) -> FastAPI:
    """
    Create a FastAPI application with the common service wiring.

    Args:
        service_info: Service identity
        custom_lifespan: Optional lifespan context manager
        include_health_check: Register ``/`` and ``/health``
        include_logging_middleware: Log method, path, status and duration per request
        app_settings: Settings override, defaults to the global settings

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or get_settings()

    if custom_lifespan is None:
        @asynccontextmanager
        async def custom_lifespan(app: FastAPI):
            logger.info(f"{service_info.name} service starting")
            yield
            logger.info(f"{service_info.name} service stopped")

    app = FastAPI(
        title=service_info.title,
        description=service_info.description,
        version=service_info.version,
        lifespan=custom_lifespan,
        openapi_tags=[{"name": "Health", "description": "Health check and service status"}, *service_info.tags],
    )

    _configure_cors(app, app_settings.service.cors_origins)

    if include_logging_middleware:
        _add_request_log(app)

    if include_health_check:
        _add_health_check(app, service_info)

    logger.info(f"{service_info.name} FastAPI app created")
    return app


def _configure_cors(app: FastAPI, origins: List[str]) -> None:
    if not origins:
        logger.info("CORS disabled")
        return
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials cannot be combined with a wildcard origin.
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info(f"CORS enabled with origins: {origins[:3]}")


def _add_request_log(app: FastAPI) -> None:
    @app.middleware("http")
    async def _request_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response


def _add_health_check(app: FastAPI, service_info: ServiceInfo) -> None:
    @app.get("/", tags=["Health"])
    async def root():
        return {
            "service": service_info.name,
            "title": service_info.title,
            "version": service_info.version,
            "description": service_info.description,
            "status": "running",
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {
            "status": "healthy",
            "service": service_info.name,
            "version": service_info.version,
        }
