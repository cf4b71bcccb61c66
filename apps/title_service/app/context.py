from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from blog_schemas.models import OperationKind, OperationState

from .credentials import CredentialStore
from .executor import RequestExecutor


def _empty_slots() -> Dict[OperationKind, OperationState]:
    return {kind: OperationState.idle(kind) for kind in OperationKind}


@dataclass
class AppContext:
    """
    Everything the orchestrator mutates or reads between requests:
    the credential (cached copy plus its store), the HTTP executor and one
    state slot per operation kind.
    """

    store: CredentialStore
    executor: RequestExecutor
    credential: str = ""
    slots: Dict[OperationKind, OperationState] = field(default_factory=_empty_slots)

    @classmethod
    async def initialize(cls, store: CredentialStore, executor: RequestExecutor) -> "AppContext":
        ctx = cls(store=store, executor=executor)
        ctx.credential = await store.load()
        return ctx

    async def current_credential(self) -> str:
        # The stored value may have been edited elsewhere since startup.
        self.credential = await self.store.load()
        return self.credential

    async def set_credential(self, value: str) -> None:
        self.credential = await self.store.save(value)

    @property
    def has_credential(self) -> bool:
        return bool(self.credential)
