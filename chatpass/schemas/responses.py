from typing import Optional

from pydantic import BaseModel, Field


class LinkOut(BaseModel):
    link: str = Field(..., description="Shareable link carrying the signed token")
    durationMinutes: float


class ErrorOut(BaseModel):
    error: str


class SessionOut(BaseModel):
    remaining: int
    blocked: bool
    maxCredits: int
    expiresAt: Optional[int] = None
    theme: str


class TurnOut(SessionOut):
    consumed: bool


class SignalOut(BaseModel):
    counted: bool
    pending: int
