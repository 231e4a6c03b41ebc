"""
Admin session cookie endpoints

The token itself is issued by the content API; these routes only store it in
(or remove it from) the cookie the edge gate checks.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from asal.config.settings import ApplicationSettings, get_settings
from asal.security.auth_cookies import clear_auth_token_cookie, set_auth_token_cookie

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


class SessionRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Session token issued by the content API")


@router.post("/session")
async def create_session(
    request: SessionRequest,
    settings: ApplicationSettings = Depends(get_settings),
):
    response = JSONResponse(status_code=status.HTTP_200_OK, content={"authenticated": True})
    set_auth_token_cookie(
        response,
        request.token,
        max_age=settings.edge.auth_cookie_max_age,
        cookie_name=settings.edge.auth_cookie_name,
    )
    logger.info("Admin session cookie issued")
    return response


@router.delete("/session")
async def delete_session(settings: ApplicationSettings = Depends(get_settings)):
    response = JSONResponse(status_code=status.HTTP_200_OK, content={"authenticated": False})
    clear_auth_token_cookie(response, cookie_name=settings.edge.auth_cookie_name)
    return response
