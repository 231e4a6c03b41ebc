"""
Image URL resolution endpoint
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from asal.config.settings import ApplicationSettings, get_settings
from asal.utils.image_urls import resolve_image_url

router = APIRouter(prefix="/api/v1/media", tags=["Media"])


class ResolveImagesRequest(BaseModel):
    sources: List[Optional[str]] = Field(default_factory=list, description="Raw image values from content records")


@router.post("/resolve")
async def resolve_images(
    request: ResolveImagesRequest,
    settings: ApplicationSettings = Depends(get_settings),
):
    return {
        "urls": [
            resolve_image_url(
                src,
                placeholder=settings.media.image_placeholder,
                base_url=settings.media.api_image_url,
            )
            for src in request.sources
        ]
    }
