"""
Edge service for the Asal Media site

Sits in front of the site pages:
- host routing and the admin session gate (edge.middleware.access)
- request locale negotiation and localized JSON responses (asal.i18n.middleware)
- content localization, category labels, UI strings and image URL endpoints
"""

# Load environment variables first (before other imports)
from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from asal.config.settings import ApplicationSettings, get_settings
from asal.i18n.middleware import install_i18n_middleware
from asal.i18n.translator import TranslatorConfig
from asal.services.machine_translator import MachineTranslator
from asal.services.service_factory import ServiceInfo, create_fastapi_service
from asal.utils.app_logger import configure_logging, get_edge_logger
from edge.middleware.access import AccessRules, install_access_middleware
from edge.routers import auth, content, media

logger = get_edge_logger("main")


def _service_info() -> ServiceInfo:
    return ServiceInfo(
        name="Edge",
        title="Asal Media Edge Service",
        description="Host routing, admin gate and content localization for the Asal Media site",
        tags=[
            {"name": "Content", "description": "Content localization"},
            {"name": "Media", "description": "Image URL resolution"},
            {"name": "Auth", "description": "Admin session cookie"},
        ],
    )


def create_app(app_settings: Optional[ApplicationSettings] = None) -> FastAPI:
    app_settings = app_settings or get_settings()
    configure_logging(app_settings.service.log_level)
    service_info = _service_info()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{service_info.name} service starting")
        app.state.machine_translator = MachineTranslator.from_settings(app_settings.translation)
        try:
            yield
        finally:
            await app.state.machine_translator.close()
            app.state.machine_translator = None
            logger.info(f"{service_info.name} service stopped")

    app = create_fastapi_service(service_info, custom_lifespan=lifespan, app_settings=app_settings)

    app.include_router(content.router)
    app.include_router(media.router)
    app.include_router(auth.router)

    # Middleware added last runs first: the access gate sees requests before i18n.
    install_i18n_middleware(
        app,
        config=TranslatorConfig.from_settings(app_settings.i18n),
        max_body_bytes=app_settings.i18n.max_rewrite_body_bytes,
    )
    install_access_middleware(app, AccessRules.from_settings(app_settings.edge))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    service_settings = get_settings().service
    # log_config=None keeps the handlers installed by configure_logging.
    uvicorn.run(
        "edge.main:app",
        host=service_settings.host,
        port=service_settings.port,
        log_level=service_settings.log_level.lower(),
        log_config=None,
    )
