"""
Edge service dependencies

Services live on ``app.state`` and are created in the lifespan hook; routers
reach them through these FastAPI Depends() providers so tests can override them.
"""

from typing import Optional

from fastapi import Depends, Request

from asal.config.settings import ApplicationSettings, get_settings
from asal.i18n.translator import TranslatorConfig
from asal.services.machine_translator import MachineTranslator


def get_machine_translator(request: Request) -> Optional[MachineTranslator]:
    return getattr(request.app.state, "machine_translator", None)


def get_translator_config(settings: ApplicationSettings = Depends(get_settings)) -> TranslatorConfig:
    return TranslatorConfig.from_settings(settings.i18n)
