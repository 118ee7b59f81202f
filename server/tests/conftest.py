"""Shared fixtures: short generation delay, emit recorder, HTTP client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from oneshot.config import settings
from oneshot.services.deck_session import DeckSession

FAST_DELAY = 0.05


class EmitRecorder:
    """Async emit callback that keeps every (event, data) pair."""

    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    async def __call__(self, event: str, data: dict):
        self.events.append((event, data))

    def of_type(self, event: str) -> list[dict]:
        return [data for name, data in self.events if name == event]

    @property
    def steps(self) -> list[str]:
        return [data["step"] for data in self.of_type("session_state")]


@pytest.fixture(autouse=True)
def fast_generation(monkeypatch):
    monkeypatch.setattr(settings, "generation_delay_secs", FAST_DELAY)
    return FAST_DELAY


@pytest.fixture
def recorder() -> EmitRecorder:
    return EmitRecorder()


@pytest_asyncio.fixture
async def deck_session(recorder):
    session = DeckSession("test-session", emit_callback=recorder)
    yield session
    await session.close()


@pytest_asyncio.fixture
async def client():
    from oneshot.main import app
    from oneshot.services.session_registry import registry

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    await registry.close_all()
