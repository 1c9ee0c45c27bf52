from typing import Optional, Protocol


class QuotaStorePort(Protocol):
    async def get(self, key: str) -> Optional[str]:
        """Raw stored value for `key` (decimal string), None if absent.
        Raises StorageUnavailable when the backend cannot be reached."""

    async def set(self, key: str, remaining: int) -> None:
        """Persist `remaining` as a decimal string under `key`.
        Raises StorageUnavailable when the backend cannot be reached."""
