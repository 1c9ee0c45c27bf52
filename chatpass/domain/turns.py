from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Union

# English and French send-intent words, matched as substrings.
SEND_KEYWORDS = ("send", "submit", "envoyer", "envoi")


@dataclass(frozen=True)
class KeyPress:
    key: str
    shift: bool = False


@dataclass(frozen=True)
class ControlInfo:
    """Nearest enclosing interactive element of a click target."""

    type: Optional[str] = None
    aria_label: Optional[str] = None
    text: Optional[str] = None


@dataclass(frozen=True)
class PointerClick:
    control: Optional[ControlInfo] = None


Signal = Union[KeyPress, PointerClick]


class PendingTurns:
    """User sends not yet matched by a completion. Memory only."""

    def __init__(self) -> None:
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    def add(self) -> None:
        self._count += 1

    def take(self) -> bool:
        if self._count <= 0:
            return False
        self._count -= 1
        return True


def is_submit_key(event: KeyPress) -> bool:
    return event.key == "Enter" and not event.shift


def is_send_control(control: Optional[ControlInfo]) -> bool:
    if control is None:
        return False
    if (control.type or "").strip().lower() == "submit":
        return True
    haystack = f"{control.aria_label or ''} {control.text or ''}".lower()
    return any(word in haystack for word in SEND_KEYWORDS)


class TurnDetector:
    """
    Turns raw user-intent signals into pending turns. Silent while the
    session is blocked.
    """

    def __init__(
        self, pending: PendingTurns, *, is_blocked: Callable[[], bool]
    ) -> None:
        self._pending = pending
        self._is_blocked = is_blocked

    @property
    def pending(self) -> int:
        return self._pending.count

    def observe(self, signal: Signal) -> bool:
        """Return True if the signal was counted as a send."""
        if self._is_blocked():
            return False
        if isinstance(signal, KeyPress):
            counted = is_submit_key(signal)
        elif isinstance(signal, PointerClick):
            counted = is_send_control(signal.control)
        else:
            raise TypeError(f"unsupported signal: {type(signal).__name__}")
        if counted:
            self._pending.add()
        return counted
