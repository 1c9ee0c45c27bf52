from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from chatpass.domain.notifier import Notifier
from chatpass.domain.ports.chat_widget import ChatWidgetRelayPort
from chatpass.domain.ports.quota_store import QuotaStorePort
from chatpass.domain.quota import (
    DEBOUNCE_SECONDS,
    MAX_CREDITS,
    QuotaMeter,
    storage_key_for,
)
from chatpass.domain.services import now_ms
from chatpass.domain.turns import PendingTurns, Signal, TurnDetector
from chatpass.infrastructure.widget.relay import RelayChatWidget

logger = logging.getLogger(__name__)


class ChatSession:
    """
    One loaded protected page: widget, turn detector and quota meter wired
    together. Restarting the session (a page reload) builds a fresh one, so
    the pending-turn count starts from zero again while the quota is restored.
    """

    def __init__(
        self,
        *,
        token: Optional[str],
        expires_at: Optional[int],
        store: QuotaStorePort,
        notifier: Notifier,
        widget: Optional[ChatWidgetRelayPort] = None,
        key_prefix: str = "",
        theme: str = "dark",
        max_credits: int = MAX_CREDITS,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.token = token
        self.expires_at = expires_at
        self.theme = theme
        self.widget = widget or RelayChatWidget()
        self.pending = PendingTurns()
        self.meter = QuotaMeter(
            key=storage_key_for(token, key_prefix),
            store=store,
            notifier=notifier,
            pending=self.pending,
            max_credits=max_credits,
            debounce_seconds=debounce_seconds,
            clock=clock,
        )
        self.detector = TurnDetector(self.pending, is_blocked=lambda: self.meter.blocked)

    @property
    def key(self) -> str:
        return self.meter.key

    async def start(self) -> int:
        self.widget.configure(self.theme)
        self.widget.on_turn_complete(self.meter.on_turn_complete)
        self.widget.on_action(self._log_action)
        return await self.meter.start()

    def observe(self, signal: Signal) -> bool:
        return self.detector.observe(signal)

    async def turn_complete(self) -> bool:
        results = await self.widget.fire_turn_complete()
        return any(results)

    async def action(self, action: dict[str, Any]) -> None:
        await self.widget.fire_action(action)

    async def _log_action(self, action: dict[str, Any]) -> None:
        logger.info(
            "widget action",
            extra={"key": self.key, "action_type": action.get("type")},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "remaining": self.meter.remaining,
            "blocked": self.meter.blocked,
            "maxCredits": self.meter.max_credits,
            "expiresAt": self.expires_at,
            "theme": self.theme,
        }


class SessionRegistry:
    """Live sessions of this process, by raw token."""

    def __init__(self, factory: Callable[[Optional[str], Optional[int]], ChatSession]) -> None:
        self._factory = factory
        self._sessions: dict[Optional[str], ChatSession] = {}

    async def start(self, token: Optional[str], expires_at: Optional[int]) -> ChatSession:
        self._drop_expired()
        session = self._factory(token, expires_at)
        await session.start()
        self._sessions[token] = session
        logger.info(
            "session started",
            extra={"key": session.key, "remaining": session.meter.remaining},
        )
        return session

    async def get_or_start(
        self, token: Optional[str], expires_at: Optional[int]
    ) -> ChatSession:
        session = self.get(token)
        if session is None:
            session = await self.start(token, expires_at)
        return session

    def get(self, token: Optional[str]) -> Optional[ChatSession]:
        return self._sessions.get(token)

    def _drop_expired(self) -> None:
        now = now_ms()
        expired = [
            token
            for token, session in self._sessions.items()
            if session.expires_at is not None and session.expires_at < now
        ]
        for token in expired:
            del self._sessions[token]
