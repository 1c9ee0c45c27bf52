from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol

TurnCompleteCallback = Callable[[], Awaitable[Any]]
ActionCallback = Callable[[dict[str, Any]], Awaitable[Any]]


class ChatWidgetPort(Protocol):
    """
    Opaque chat surface. It fires its callbacks whenever it likes: a turn
    callback may fire more than once per turn, and once for the greeting.
    """

    def configure(self, theme: str) -> None:
        """Apply the visual theme."""

    def on_turn_complete(self, callback: TurnCompleteCallback) -> None:
        """Register the callback fired after an assistant turn."""

    def on_action(self, callback: ActionCallback) -> None:
        """Register the callback fired for structured widget actions."""


class ChatWidgetRelayPort(ChatWidgetPort, Protocol):
    """A widget whose callbacks are fired from outside, e.g. relayed over HTTP."""

    async def fire_turn_complete(self) -> list[Any]:
        """Invoke every turn-complete callback; return their results."""

    async def fire_action(self, action: dict[str, Any]) -> None:
        """Invoke every action callback with `action`."""
