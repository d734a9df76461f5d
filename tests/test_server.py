"""Tests for the FastAPI session endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from roof_takeoff.server import app

from conftest import ORLANDO_BOX, north_line


@pytest.fixture
def client():
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


def _payload(pairs) -> list[dict]:
    return [{"lat": lat, "lng": lng} for lat, lng in pairs]


def _line(length_ft) -> list[dict]:
    return [v.model_dump() for v in north_line(length_ft)]


async def _new_session(client) -> str:
    resp = await client.post("/sessions")
    assert resp.status_code == 201
    return resp.json()["session_id"]


async def _draw_area(client, sid) -> str:
    await client.post(f"/sessions/{sid}/tool", json={"kind": "area"})
    resp = await client.post(f"/sessions/{sid}/shapes", json={"kind": "area", "vertices": _payload(ORLANDO_BOX)})
    assert resp.status_code == 200
    return resp.json()["shape_id"]


async def _draw_line(client, sid, category, length_ft) -> str:
    await client.post(f"/sessions/{sid}/tool", json={"kind": "linear", "category": category})
    resp = await client.post(
        f"/sessions/{sid}/shapes",
        json={"kind": "linear", "category": category, "vertices": _line(length_ft)},
    )
    assert resp.status_code == 200
    return resp.json()["shape_id"]


@pytest.mark.asyncio
class TestSessionFlow:
    async def test_new_session_is_idle(self, client):
        resp = await client.post("/sessions")
        data = resp.json()
        assert data["state"] == "idle"
        assert data["pitch"] == "4/12"
        assert "measurements" not in data

    async def test_area_then_lines(self, client):
        sid = await _new_session(client)
        await _draw_area(client, sid)
        await _draw_line(client, sid, "eaves", 40)
        await _draw_line(client, sid, "eaves", 60)

        resp = await client.get(f"/sessions/{sid}/measurements")
        assert resp.status_code == 200
        m = resp.json()
        assert m["eaves"] == 100
        assert m["pitch_multiplier"] == 1.054
        assert "rakes" not in m

    async def test_tool_state_reported(self, client):
        sid = await _new_session(client)
        await _draw_area(client, sid)
        resp = await client.post(f"/sessions/{sid}/tool", json={"kind": "linear", "category": "hips"})
        data = resp.json()
        assert data["state"] == "has_area_drawing_linear"
        assert data["category"] == "hips"

        resp = await client.post(f"/sessions/{sid}/cancel")
        assert resp.json()["state"] == "has_area"

    async def test_vertex_edit(self, client):
        sid = await _new_session(client)
        area_id = await _draw_area(client, sid)
        doubled = [(28.5383, -81.3792), (28.5385, -81.3792), (28.5385, -81.3790), (28.5383, -81.3790)]
        before = (await client.get(f"/sessions/{sid}/measurements")).json()["flat_area"]
        resp = await client.put(f"/sessions/{sid}/shapes/{area_id}/vertices", json={"vertices": _payload(doubled)})
        assert resp.status_code == 200
        after = resp.json()["measurements"]["flat_area"]
        assert after / before == pytest.approx(4.0, rel=2e-3)

    async def test_pitch_change(self, client):
        sid = await _new_session(client)
        await _draw_area(client, sid)
        resp = await client.put(f"/sessions/{sid}/pitch", json={"pitch": "flat"})
        m = resp.json()["measurements"]
        assert m["total_area"] == m["flat_area"]

    async def test_clear_category_and_restart(self, client):
        sid = await _new_session(client)
        await _draw_area(client, sid)
        await _draw_line(client, sid, "eaves", 40)
        await _draw_line(client, sid, "rakes", 25)

        resp = await client.delete(f"/sessions/{sid}/categories/eaves")
        m = resp.json()["measurements"]
        assert "eaves" not in m
        assert m["rakes"] == 25

        resp = await client.post(f"/sessions/{sid}/restart")
        assert resp.json()["state"] == "idle"
        assert (await client.get(f"/sessions/{sid}/measurements")).json() is None

    async def test_clear_area_and_lines(self, client):
        sid = await _new_session(client)
        await _draw_area(client, sid)
        await _draw_line(client, sid, "valleys", 12)
        resp = await client.delete(f"/sessions/{sid}/lines")
        assert "valleys" not in resp.json()["measurements"]
        resp = await client.delete(f"/sessions/{sid}/area")
        assert "measurements" not in resp.json()

    async def test_remove_single_line(self, client):
        sid = await _new_session(client)
        await _draw_area(client, sid)
        seg = await _draw_line(client, sid, "ridges", 20)
        resp = await client.delete(f"/sessions/{sid}/shapes/{seg}")
        assert "ridges" not in resp.json()["measurements"]

    async def test_delete_session(self, client):
        sid = await _new_session(client)
        assert (await client.delete(f"/sessions/{sid}")).status_code == 204
        assert (await client.get(f"/sessions/{sid}")).status_code == 404


@pytest.mark.asyncio
class TestErrors:
    async def test_unknown_session_returns_404(self, client):
        resp = await client.get("/sessions/ts_missing")
        assert resp.status_code == 404

    async def test_unknown_shape_returns_404(self, client):
        sid = await _new_session(client)
        resp = await client.put(f"/sessions/{sid}/shapes/seg_missing/vertices", json={"vertices": _line(5)})
        assert resp.status_code == 404

    async def test_completion_without_tool_returns_409(self, client):
        sid = await _new_session(client)
        resp = await client.post(f"/sessions/{sid}/shapes", json={"kind": "area", "vertices": _payload(ORLANDO_BOX)})
        assert resp.status_code == 409

    async def test_area_completion_with_category_returns_409(self, client):
        sid = await _new_session(client)
        await client.post(f"/sessions/{sid}/tool", json={"kind": "area"})
        resp = await client.post(
            f"/sessions/{sid}/shapes",
            json={"kind": "area", "category": "eaves", "vertices": _payload(ORLANDO_BOX)},
        )
        assert resp.status_code == 409
        assert (await client.get(f"/sessions/{sid}")).json()["state"] == "drawing_area"

    async def test_linear_tool_without_category_returns_422(self, client):
        sid = await _new_session(client)
        resp = await client.post(f"/sessions/{sid}/tool", json={"kind": "linear"})
        assert resp.status_code == 422

    async def test_unknown_category_returns_422(self, client):
        sid = await _new_session(client)
        resp = await client.delete(f"/sessions/{sid}/categories/gutters")
        assert resp.status_code == 422

    async def test_bad_latitude_returns_422(self, client):
        sid = await _new_session(client)
        await client.post(f"/sessions/{sid}/tool", json={"kind": "area"})
        resp = await client.post(f"/sessions/{sid}/shapes", json={"kind": "area", "vertices": _payload([(91, 0)] * 3)})
        assert resp.status_code == 422


@pytest.mark.asyncio
class TestPitches:
    async def test_lists_table(self, client):
        resp = await client.get("/pitches")
        data = resp.json()
        assert data[0] == {"label": "flat", "multiplier": 1.0}
        assert len(data) == 12
