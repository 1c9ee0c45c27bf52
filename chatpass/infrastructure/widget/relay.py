from __future__ import annotations

from typing import Any, Optional

from chatpass.domain.ports.chat_widget import (
    ActionCallback,
    ChatWidgetRelayPort,
    TurnCompleteCallback,
)


class RelayChatWidget(ChatWidgetRelayPort):
    """
    Server-side stand-in for the browser widget. The page relays the
    widget's callbacks over HTTP and the routes fire them here.
    """

    def __init__(self) -> None:
        self.theme: Optional[str] = None
        self._turn_callbacks: list[TurnCompleteCallback] = []
        self._action_callbacks: list[ActionCallback] = []

    def configure(self, theme: str) -> None:
        self.theme = theme

    def on_turn_complete(self, callback: TurnCompleteCallback) -> None:
        self._turn_callbacks.append(callback)

    def on_action(self, callback: ActionCallback) -> None:
        self._action_callbacks.append(callback)

    async def fire_turn_complete(self) -> list[Any]:
        return [await cb() for cb in self._turn_callbacks]

    async def fire_action(self, action: dict[str, Any]) -> None:
        for cb in self._action_callbacks:
            await cb(action)
