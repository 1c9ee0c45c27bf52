"""In-process pub/sub for remaining-credit updates."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotaChanged:
    remaining: int
    key: str = ""


Subscriber = Callable[[QuotaChanged], None]


class Notifier:
    """
    Broadcasts QuotaChanged events. Each event is the authoritative current
    value for its key, not a delta, so subscribers keep only the latest one.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: QuotaChanged) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "quota subscriber failed",
                    extra={"key": event.key, "remaining": event.remaining},
                )


_notifier: Optional[Notifier] = None


def get_notifier() -> Notifier:
    """Lazy process-wide notifier."""
    global _notifier
    if _notifier is None:
        _notifier = Notifier()
    return _notifier
