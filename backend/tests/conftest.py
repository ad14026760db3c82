# tests/conftest.py
"""
Fixtures and factories shared across the whole suite.

Three layers:
    1. Engine  - pure functions, no mock needed (observation factories)
    2. Service - repositories patched with pytest-mock, AsyncMock session
    3. Router  - httpx.AsyncClient + FastAPI dependency_overrides
"""
import pytest
from types import SimpleNamespace
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from debag.main import app
from debag.core.config import settings
from debag.core.database import get_db
from debag.shared.enums import Role, Belt, ShiftWindow, FlowCondition

TEST_PIN = "4321"


# ── ORM model factories (SimpleNamespace - light, no ORM) ─────────────────────

def make_person(**kwargs) -> SimpleNamespace:
    defaults = {
        "id": 1,
        "name": "Alex Carter",
        "employee_code": "DB001",
        "active": True,
        "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_observation(**kwargs) -> SimpleNamespace:
    """
    Observation with a linked person. avg_seconds_per_bag follows
    bags_timed / total_seconds unless given explicitly.
    """
    defaults = {
        "id": 1,
        "person_id": 1,
        "role": Role.DUMPER,
        "belt": Belt.DEBAG1,
        "shift_window": ShiftWindow.EARLY,
        "bags_timed": 10,
        "total_seconds": 47,
        "flow_condition": FlowCondition.NORMAL,
        "quality_issue": False,
        "safety_issue": False,
        "notes": None,
        "created_at": datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc),
    }
    defaults.update(kwargs)
    if "avg_seconds_per_bag" not in defaults:
        defaults["avg_seconds_per_bag"] = round(defaults["total_seconds"] / defaults["bags_timed"], 2)
    if "person" not in defaults:
        defaults["person"] = make_person(id=defaults["person_id"])
    return SimpleNamespace(**defaults)


# ── DB mock factory ───────────────────────────────────────────────────────────

def make_async_db() -> AsyncMock:
    """
    AsyncMock standing in for an AsyncSession.
    refresh() assigns an id, as the DB would.
    """
    db = AsyncMock(spec=AsyncSession)
    db.add = MagicMock()
    db.add_all = MagicMock()

    async def refresh_side_effect(obj, *args, **kwargs):
        if not getattr(obj, "id", None):
            obj.id = 1

    db.refresh = AsyncMock(side_effect=refresh_side_effect)
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.close = AsyncMock()
    return db


# ── HTTP fixtures (httpx.AsyncClient + dependency_overrides) ─────────────────

@pytest.fixture
async def client(monkeypatch):
    """Client with no PIN configured - every request is authorized."""
    monkeypatch.setattr(settings, "APP_PIN", None)
    mock_db = AsyncMock(spec=AsyncSession)
    app.dependency_overrides[get_db] = lambda: mock_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def pin_client(monkeypatch):
    """Client against an API protected by TEST_PIN (header not sent by default)."""
    monkeypatch.setattr(settings, "APP_PIN", TEST_PIN)
    mock_db = AsyncMock(spec=AsyncSession)
    app.dependency_overrides[get_db] = lambda: mock_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
