# tests/modules/observations/test_router.py
"""
HTTP tests for /observations - service patched, DB overridden.
"""
import pytest
from unittest.mock import AsyncMock

from debag.modules.observations.service import OBSERVATION_NOT_FOUND, PERSON_NOT_FOUND
from debag.shared.enums import Role, ShiftWindow
from debag.shared.validators import START_AFTER_END
from tests.conftest import make_observation

pytestmark = pytest.mark.router

VALID_BODY = {
    "personId": 1,
    "role": "DUMPER",
    "belt": "DEBAG1",
    "shiftWindow": "EARLY",
    "bagsTimed": 10,
    "totalSeconds": 47,
}


# ── POST /observations ─────────────────────────────────────────────────────────

class TestCreateObservation:
    @pytest.mark.asyncio
    async def test_created(self, client, mocker):
        mocker.patch(
            "debag.modules.observations.router.service.create",
            AsyncMock(return_value=make_observation()),
        )
        resp = await client.post("/observations", json=VALID_BODY)

        assert resp.status_code == 201
        body = resp.json()
        assert body["avgSecondsPerBag"] == 4.7
        assert body["shiftWindow"] == "EARLY"
        assert body["flowCondition"] == "NORMAL"
        assert body["person"]["name"] == "Alex Carter"

    @pytest.mark.asyncio
    async def test_unknown_person(self, client, mocker):
        mocker.patch(
            "debag.modules.observations.router.service.create",
            AsyncMock(side_effect=KeyError(PERSON_NOT_FOUND)),
        )
        resp = await client.post("/observations", json=VALID_BODY)

        assert resp.status_code == 404
        assert resp.json() == {"error": "Person not found."}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,value", [
        ("bagsTimed", 0),
        ("totalSeconds", 0),
        ("role", "PICKER"),
        ("personId", -1),
    ])
    async def test_invalid_body(self, client, mocker, field, value):
        create = mocker.patch("debag.modules.observations.router.service.create", AsyncMock())
        resp = await client.post("/observations", json={**VALID_BODY, field: value})

        assert resp.status_code == 400
        assert isinstance(resp.json()["error"], str)
        create.assert_not_awaited()


# ── GET /observations ──────────────────────────────────────────────────────────

class TestListObservations:
    @pytest.mark.asyncio
    async def test_filters_parsed(self, client, mocker):
        list_observations = mocker.patch(
            "debag.modules.observations.router.service.list_observations",
            AsyncMock(return_value=[make_observation()]),
        )
        resp = await client.get(
            "/observations",
            params={"role": "DUMPER", "shiftWindow": "EARLY", "limit": "5", "belt": ""},
        )

        assert resp.status_code == 200
        assert len(resp.json()) == 1
        filters = list_observations.call_args.args[1]
        assert filters.role == Role.DUMPER
        assert filters.shift_window == ShiftWindow.EARLY
        assert filters.belt is None
        assert filters.limit == 5

    @pytest.mark.asyncio
    async def test_snake_case_alias(self, client, mocker):
        list_observations = mocker.patch(
            "debag.modules.observations.router.service.list_observations",
            AsyncMock(return_value=[]),
        )
        resp = await client.get("/observations", params={"shift_window": "LATE"})

        assert resp.status_code == 200
        assert list_observations.call_args.args[1].shift_window == ShiftWindow.LATE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [
        {"limit": "500"},
        {"limit": "abc"},
        {"role": "PICKER"},
    ])
    async def test_bad_filter(self, client, mocker, params):
        list_observations = mocker.patch(
            "debag.modules.observations.router.service.list_observations",
            AsyncMock(return_value=[]),
        )
        resp = await client.get("/observations", params=params)

        assert resp.status_code == 400
        list_observations.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_range(self, client, mocker):
        mocker.patch(
            "debag.modules.observations.router.service.list_observations",
            AsyncMock(side_effect=ValueError(START_AFTER_END)),
        )
        resp = await client.get("/observations", params={"start": "2025-02-01", "end": "2025-01-01"})

        assert resp.status_code == 400
        assert resp.json() == {"error": START_AFTER_END}


# ── DELETE /observations/{id} ──────────────────────────────────────────────────

class TestDeleteObservation:
    @pytest.mark.asyncio
    async def test_deleted(self, client, mocker):
        delete = mocker.patch(
            "debag.modules.observations.router.service.delete",
            AsyncMock(return_value=None),
        )
        resp = await client.delete("/observations/12")

        assert resp.status_code == 204
        assert resp.content == b""
        assert delete.call_args.args[1] == 12

    @pytest.mark.asyncio
    async def test_not_found(self, client, mocker):
        mocker.patch(
            "debag.modules.observations.router.service.delete",
            AsyncMock(side_effect=KeyError(OBSERVATION_NOT_FOUND)),
        )
        resp = await client.delete("/observations/999")

        assert resp.status_code == 404
        assert resp.json() == {"error": "Observation not found."}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["0", "-4", "abc", "12.0", "+12", "\u0661\u0662"])
    async def test_invalid_id(self, client, mocker, raw_id):
        delete = mocker.patch("debag.modules.observations.router.service.delete", AsyncMock())
        resp = await client.delete(f"/observations/{raw_id}")

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid observation id."}
        delete.assert_not_awaited()


# ── GET /observations/export ───────────────────────────────────────────────────

class TestExport:
    @pytest.mark.asyncio
    async def test_attachment(self, client, mocker):
        mocker.patch(
            "debag.modules.observations.router.service.export_csv",
            AsyncMock(return_value=("a,b\n1,2", "debags_2025-01-01_to_2025-01-31.csv")),
        )
        resp = await client.get("/observations/export", params={"start": "2025-01-01", "end": "2025-01-31"})

        assert resp.status_code == 200
        assert resp.headers["content-type"] == "text/csv; charset=utf-8"
        assert resp.headers["content-disposition"] == (
            'attachment; filename="debags_2025-01-01_to_2025-01-31.csv"'
        )
        assert resp.text == "a,b\n1,2"

    @pytest.mark.asyncio
    async def test_missing_end(self, client, mocker):
        export_csv = mocker.patch("debag.modules.observations.router.service.export_csv", AsyncMock())
        resp = await client.get("/observations/export", params={"start": "2025-01-01"})

        assert resp.status_code == 400
        export_csv.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_range(self, client, mocker):
        mocker.patch(
            "debag.modules.observations.router.service.export_csv",
            AsyncMock(side_effect=ValueError("Invalid date range.")),
        )
        resp = await client.get("/observations/export", params={"start": "x", "end": "y"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid date range."}


# ── PIN gate ahead of body parsing ─────────────────────────────────────────────

class TestPinBeforeBody:
    @pytest.mark.asyncio
    async def test_malformed_body_wrong_pin_is_401(self, pin_client, mocker):
        create = mocker.patch("debag.modules.observations.router.service.create", AsyncMock())
        resp = await pin_client.post(
            "/observations",
            content=b"{not json",
            headers={"x-app-pin": "wrong", "content-type": "application/json"},
        )

        assert resp.status_code == 401
        assert resp.json() == {"error": "Unauthorized. Invalid app PIN."}
        create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_query_without_pin_is_401(self, pin_client):
        resp = await pin_client.get("/observations", params={"limit": "abc"})
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_malformed_body_no_pin_configured(self, client):
        resp = await client.post(
            "/observations",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json() == {"error": "JSON decode error"}
