import asyncio

import pytest

from oneshot.services.session_registry import registry

pytestmark = pytest.mark.asyncio


async def _create(client, **payload):
    resp = await client.post("/api/sessions/", json=payload or None)
    assert resp.status_code == 201
    return resp.json()


async def test_health_and_meta(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"

    meta = (await client.get("/api/meta")).json()
    assert meta["name"] == "OneShot Deck"
    assert meta["slide_count"] == 6


async def test_list_and_get_themes(client):
    resp = await client.get("/api/themes/")
    assert resp.status_code == 200
    assert [t["id"] for t in resp.json()] == ["modern", "creative", "minimal"]

    resp = await client.get("/api/themes/creative")
    assert resp.json()["name"] == "クリエイティブ"

    resp = await client.get("/api/themes/neon")
    assert resp.status_code == 404


async def test_create_session_defaults(client):
    data = await _create(client)
    assert data["step"] == "input"
    assert data["keyword"] == ""
    assert data["theme_id"] == "modern"
    assert data["slides"] == []
    assert data["can_submit"] is False
    assert data["id"] in registry


async def test_create_session_with_unknown_theme(client):
    resp = await client.post("/api/sessions/", json={"theme_id": "neon"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Unknown theme: neon"


async def test_missing_session_is_404(client):
    resp = await client.get("/api/sessions/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Session not found"


async def test_blank_keyword_generate_is_rejected(client):
    session = await _create(client)
    await client.put(f"/api/sessions/{session['id']}/keyword", json={"keyword": "   "})

    resp = await client.post(f"/api/sessions/{session['id']}/generate")
    assert resp.status_code == 200
    body = resp.json()
    assert body["accepted"] is False
    assert body["session"]["step"] == "input"
    assert body["session"]["slides"] == []


async def test_generate_flow(client, fast_generation):
    session = await _create(client)
    sid = session["id"]

    resp = await client.put(f"/api/sessions/{sid}/keyword", json={"keyword": "新商品発表"})
    assert resp.json()["can_submit"] is True
    resp = await client.put(f"/api/sessions/{sid}/theme", json={"theme_id": "creative"})
    assert resp.json()["theme_id"] == "creative"

    resp = await client.post(f"/api/sessions/{sid}/generate")
    assert resp.status_code == 202
    body = resp.json()
    assert body["accepted"] is True
    assert body["session"]["step"] == "generating"
    assert body["session"]["busy"] is True
    assert body["session"]["request"]["keyword"] == "新商品発表"

    await registry.get_session(sid).session.wait_until_ready()

    data = (await client.get(f"/api/sessions/{sid}")).json()
    assert data["step"] == "preview"
    assert [s["id"] for s in data["slides"]] == [1, 2, 3, 4, 5, 6]
    assert data["slides"][0]["title"] == "プロジェクト概要"

    view = (await client.get(f"/api/sessions/{sid}/view", params={"tab": "single"})).json()
    assert view["preview"]["tab"] == "single"
    assert view["preview"]["single"]["slide"]["id"] == 1
    assert len(view["preview"]["single"]["dots"]) == 6

    # tab choice sticks without the query parameter
    view = (await client.get(f"/api/sessions/{sid}/view")).json()
    assert view["preview"]["tab"] == "single"

    resp = await client.post(f"/api/sessions/{sid}/download")
    assert resp.json() == {"acknowledged": True, "message": "スライドをダウンロードしています..."}

    data = (await client.post(f"/api/sessions/{sid}/reset")).json()
    assert data["step"] == "input"
    assert data["keyword"] == ""
    assert data["slides"] == []
    view = (await client.get(f"/api/sessions/{sid}/view")).json()
    assert view["step"] == "input"


async def test_reset_while_generating_over_http(client, fast_generation):
    sid = (await _create(client))["id"]
    await client.put(f"/api/sessions/{sid}/keyword", json={"keyword": "新商品発表"})
    await client.post(f"/api/sessions/{sid}/generate")

    await client.post(f"/api/sessions/{sid}/reset")
    await asyncio.sleep(fast_generation * 4)

    data = (await client.get(f"/api/sessions/{sid}")).json()
    assert data["step"] == "input"
    assert data["slides"] == []


async def test_select_unknown_theme_is_400(client):
    sid = (await _create(client))["id"]
    resp = await client.put(f"/api/sessions/{sid}/theme", json={"theme_id": "retro"})
    assert resp.status_code == 400


async def test_download_before_preview_is_not_acknowledged(client):
    sid = (await _create(client))["id"]
    resp = await client.post(f"/api/sessions/{sid}/download")
    assert resp.json() == {"acknowledged": False, "message": None}


async def test_invalid_tab_is_rejected(client):
    sid = (await _create(client))["id"]
    resp = await client.get(f"/api/sessions/{sid}/view", params={"tab": "carousel"})
    assert resp.status_code == 422


async def test_delete_session(client):
    sid = (await _create(client))["id"]
    resp = await client.delete(f"/api/sessions/{sid}")
    assert resp.status_code == 204
    assert sid not in registry

    resp = await client.delete(f"/api/sessions/{sid}")
    assert resp.status_code == 404


async def test_startup_rejects_unknown_default_theme(monkeypatch):
    from oneshot.config import settings
    from oneshot.errors import UnknownTheme
    from oneshot.main import app, lifespan

    monkeypatch.setattr(settings, "default_theme", "neon")
    with pytest.raises(UnknownTheme):
        async with lifespan(app):
            pass


async def test_startup_and_shutdown_close_sessions():
    from oneshot.main import app, lifespan

    async with lifespan(app):
        active = registry.create_session()
        await active.session.set_keyword("新商品発表")
        await active.session.submit()

    assert active.id not in registry
    assert active.session.closed is True
