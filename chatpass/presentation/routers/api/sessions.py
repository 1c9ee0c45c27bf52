from typing import Any

from fastapi import APIRouter, Body, Depends

from chatpass.application.chat_session import ChatSession, SessionRegistry
from chatpass.domain.entities import AccessToken
from chatpass.domain.tokens import encode_token
from chatpass.domain.turns import ControlInfo, KeyPress, PointerClick, Signal
from chatpass.presentation.dependencies import get_registry, require_access_token
from chatpass.schemas.requests import SignalIn
from chatpass.schemas.responses import SessionOut, SignalOut, TurnOut

router = APIRouter(prefix="/session", tags=["Session"])


async def current_session(
    access: AccessToken = Depends(require_access_token),
    registry: SessionRegistry = Depends(get_registry),
) -> ChatSession:
    return await registry.get_or_start(encode_token(access), access.expires_at)


def _to_signal(payload: SignalIn) -> Signal:
    if payload.kind == "keypress":
        return KeyPress(key=payload.key or "", shift=payload.shift)
    control = None
    if payload.control is not None:
        control = ControlInfo(
            type=payload.control.type,
            aria_label=payload.control.aria_label,
            text=payload.control.text,
        )
    return PointerClick(control=control)


@router.post("", response_model=SessionOut)
async def post_start_session(
    access: AccessToken = Depends(require_access_token),
    registry: SessionRegistry = Depends(get_registry),
):
    session = await registry.start(encode_token(access), access.expires_at)
    return session.to_dict()


@router.get("", response_model=SessionOut)
async def get_session(session: ChatSession = Depends(current_session)):
    return session.to_dict()


@router.post("/signals", response_model=SignalOut)
async def post_signal(
    payload: SignalIn,
    session: ChatSession = Depends(current_session),
):
    counted = session.observe(_to_signal(payload))
    return SignalOut(counted=counted, pending=session.detector.pending)


@router.post("/turn-complete", response_model=TurnOut)
async def post_turn_complete(session: ChatSession = Depends(current_session)):
    consumed = await session.turn_complete()
    return {**session.to_dict(), "consumed": consumed}


@router.post("/actions")
async def post_action(
    action: dict[str, Any] = Body(...),
    session: ChatSession = Depends(current_session),
):
    await session.action(action)
    return {"status": "ok"}
