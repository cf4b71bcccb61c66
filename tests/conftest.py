"""Pytest fixtures shared by the title service tests."""

import inspect
import json
from typing import Callable, Dict, List, Optional

import httpx
import pytest

from app.context import AppContext
from app.credentials import CredentialStore
from app.executor import RequestExecutor
from app.orchestrator import Orchestrator


# ─────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────


def envelope(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_titles(prefix: str = "Title", n: int = 20) -> dict:
    return {
        "info": [f"{prefix} info {i}" for i in range(1, n + 1)],
        "tips": [f"{prefix} tip {i}" for i in range(1, n + 1)],
        "hotspots": [f"{prefix} hotspot {i}" for i in range(1, n + 1)],
    }


def prompt_of(request: httpx.Request) -> str:
    return json.loads(request.content)["contents"][0]["parts"][0]["text"]


class FakeKV:
    """In-memory stand-in for the Redis string calls the credential store makes."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data = dict(data or {})

    async def get_str(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set_str(self, key: str, value: str) -> None:
        self.data[key] = value

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


class SleepRecorder:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class Upstream:
    """Scripted generateContent endpoint; records every request it sees."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.handler(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    @property
    def calls(self) -> int:
        return len(self.requests)


# ─────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def kv() -> FakeKV:
    return FakeKV({"gemini_api_key": "test-key"})


@pytest.fixture
def make_orchestrator(kv: FakeKV, sleeps: SleepRecorder):
    def _make(handler, **kwargs) -> Orchestrator:
        upstream = handler if isinstance(handler, Upstream) else Upstream(handler)
        executor = RequestExecutor(transport=httpx.MockTransport(upstream), sleep=sleeps)
        ctx = AppContext(store=CredentialStore(kv), executor=executor, credential="test-key")
        return Orchestrator(ctx, **kwargs)

    return _make
