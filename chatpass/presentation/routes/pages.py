from fastapi import APIRouter, Depends

from chatpass.application.chat_session import SessionRegistry
from chatpass.domain.entities import AccessToken
from chatpass.domain.tokens import encode_token
from chatpass.presentation.dependencies import get_registry, require_access_token

router = APIRouter(tags=["Pages"])


@router.get("/")
async def protected_surface(
    access: AccessToken = Depends(require_access_token),
    registry: SessionRegistry = Depends(get_registry),
):
    # The gate has already admitted the request; rendering is the client's job.
    session = await registry.start(encode_token(access), access.expires_at)
    return {"page": "chat", **session.to_dict()}


@router.get("/expired")
async def expired_notice() -> dict:
    return {
        "page": "expired",
        "message": "This access link has expired. Please request a new link.",
    }


@router.get("/admin-panel/login")
async def admin_login() -> dict:
    return {"page": "admin-login"}


@router.get("/admin-panel")
async def admin_panel() -> dict:
    return {"page": "admin"}
