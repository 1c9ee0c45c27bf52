import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from chatpass.application.issue_link import issue_link
from chatpass.domain.errors import ConfigError
from chatpass.presentation.dependencies import get_clock, get_token_secret
from chatpass.schemas.requests import LinkRequestIn
from chatpass.schemas.responses import ErrorOut, LinkOut
from chatpass.settings import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generate-link", tags=["Links"])

USAGE_HINT = 'Use POST with JSON body: { "duration": 360 }  // 360 minutes = 6h'


async def _read_link_request(request: Request) -> LinkRequestIn:
    raw = await request.body()
    if not raw:
        return LinkRequestIn()
    try:
        return LinkRequestIn.model_validate_json(raw)
    except ValidationError:
        # unreadable body: keep the default duration
        return LinkRequestIn()


@router.post(
    "",
    response_model=LinkOut,
    responses={500: {"model": ErrorOut}},
)
async def post_generate_link(
    request: Request,
    secret: Optional[str] = Depends(get_token_secret),
    clock: Callable[[], int] = Depends(get_clock),
):
    body = await _read_link_request(request)
    settings = get_settings()
    try:
        link, minutes = issue_link(
            secret,
            settings.site_url,
            body.duration,
            default_minutes=settings.default_duration_minutes,
            clock=clock,
        )
    except ConfigError:
        logger.error("token secret missing; cannot issue link")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "TOKEN_SECRET missing"},
        )

    logger.info("link issued", extra={"duration_minutes": minutes})
    return LinkOut(link=link, durationMinutes=minutes)


@router.get("", status_code=status.HTTP_405_METHOD_NOT_ALLOWED)
async def get_generate_link():
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"message": USAGE_HINT},
    )
