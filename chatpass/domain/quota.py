from __future__ import annotations

import enum
import logging
import time
from typing import Callable, Optional

from chatpass.domain.entities import QuotaSnapshot
from chatpass.domain.errors import StorageUnavailable
from chatpass.domain.notifier import Notifier, QuotaChanged
from chatpass.domain.ports.quota_store import QuotaStorePort
from chatpass.domain.turns import PendingTurns

logger = logging.getLogger(__name__)

MAX_CREDITS = 5
DEBOUNCE_SECONDS = 1.2
ANONYMOUS_KEY = "anonymous"


class QuotaState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    BLOCKED = "blocked"


def storage_key_for(token: Optional[str], prefix: str) -> str:
    """One key per raw token string; a fixed sentinel when there is none."""
    return f"{prefix}{token or ANONYMOUS_KEY}"


def _parse_remaining(raw: Optional[str], max_credits: int) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return max(0, min(max_credits, value))


class QuotaMeter:
    """
    Remaining-credit state machine for one link.

    UNINITIALIZED -> ACTIVE | BLOCKED on start(); ACTIVE -> BLOCKED when the
    last credit is consumed. BLOCKED is terminal for writes.
    """

    def __init__(
        self,
        *,
        key: str,
        store: QuotaStorePort,
        notifier: Notifier,
        pending: PendingTurns,
        max_credits: int = MAX_CREDITS,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.key = key
        self.max_credits = max_credits
        self._store = store
        self._notifier = notifier
        self._pending = pending
        self._debounce = debounce_seconds
        self._clock = clock
        self._remaining = max_credits
        self._state = QuotaState.UNINITIALIZED
        self._last_consumed_at: Optional[float] = None

    @property
    def state(self) -> QuotaState:
        return self._state

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def blocked(self) -> bool:
        return self._state is QuotaState.BLOCKED

    def snapshot(self) -> QuotaSnapshot:
        return QuotaSnapshot(
            key=self.key, remaining=self._remaining, max_credits=self.max_credits
        )

    async def start(self) -> int:
        """Restore `remaining` from the store (or seed it) and announce it."""
        try:
            restored = _parse_remaining(await self._store.get(self.key), self.max_credits)
            if restored is None:
                restored = self.max_credits
                await self._store.set(self.key, restored)
        except StorageUnavailable:
            logger.warning(
                "quota store unavailable; using full quota for this load",
                extra={"key": self.key},
            )
            restored = self.max_credits

        self._remaining = restored
        self._state = QuotaState.BLOCKED if restored == 0 else QuotaState.ACTIVE
        self._publish()
        return restored

    async def consume_credit(self) -> bool:
        """Spend one credit. No-op (False) unless ACTIVE."""
        if self._state is not QuotaState.ACTIVE:
            return False

        self._remaining = max(0, self._remaining - 1)
        try:
            await self._store.set(self.key, self._remaining)
        except StorageUnavailable:
            logger.warning(
                "quota store unavailable; keeping value in memory",
                extra={"key": self.key, "remaining": self._remaining},
            )
        if self._remaining == 0:
            self._state = QuotaState.BLOCKED
        self._publish()
        return True

    async def on_turn_complete(self) -> bool:
        """
        Completion signal from the chat widget. Consumes a credit only when
        a detected send is pending and the previous consuming completion is
        older than the debounce window.
        """
        if self._state is not QuotaState.ACTIVE:
            return False
        if self._pending.count <= 0:
            logger.debug("completion without pending send ignored", extra={"key": self.key})
            return False
        now = self._clock()
        if self._last_consumed_at is not None and now - self._last_consumed_at < self._debounce:
            logger.debug("duplicate completion ignored", extra={"key": self.key})
            return False

        self._pending.take()
        self._last_consumed_at = now
        return await self.consume_credit()

    def _publish(self) -> None:
        self._notifier.publish(QuotaChanged(remaining=self._remaining, key=self.key))
