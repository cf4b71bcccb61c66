from __future__ import annotations

from typing import Optional, Protocol

from .config import CREDENTIAL_KEY


class KeyValueStore(Protocol):
    async def get_str(self, key: str) -> Optional[str]:
        ...

    async def set_str(self, key: str, value: str) -> None:
        ...


class CredentialStore:
    """The user's API key, kept as one named string entry."""

    def __init__(self, kv: KeyValueStore, key: str = CREDENTIAL_KEY):
        self.kv = kv
        self.key = key

    async def load(self) -> str:
        return (await self.kv.get_str(self.key) or "").strip()

    async def save(self, value: str) -> str:
        value = (value or "").strip()
        await self.kv.set_str(self.key, value)
        return value
