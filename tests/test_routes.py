from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from kardme.app import create_app
from kardme.core import config as core_config
from kardme.repositories.sql_repository import SQLRepository


@pytest.fixture()
def client(temp_db):
    with TestClient(create_app()) as test_client:
        yield test_client


def test_public_theme_route(client):
    repo = SQLRepository()
    repo.create_card(slug="ana", published=True, theme={"background": {"mode": "gradient", "from": "#000", "to": "#fff"}})
    resp = client.get("/api/cards/ana/theme")
    assert resp.status_code == 200
    body = resp.json()
    assert set(body["theme"]) == {"primary", "accent", "background", "surface", "text", "mutedText"}
    assert body["background"]["base"]["kind"] == "gradient"
    assert body["cssString"] == "linear-gradient(180deg, #000 0%, #fff 100%)"
    assert body["themeColor"] == "#000"
    assert resp.headers["x-content-type-options"] == "nosniff"


def test_public_theme_unpublished_is_404(client):
    SQLRepository().create_card(slug="draft")
    assert client.get("/api/cards/draft/theme").status_code == 404
    assert client.get("/api/cards/draft").status_code == 404


def test_public_card_includes_enabled_blocks(client):
    repo = SQLRepository()
    card = repo.create_card(slug="bia", published=True)
    repo.add_block(card.id, "profile", order=0)
    repo.add_block(card.id, "gallery", order=1, enabled=False)
    body = client.get("/api/cards/bia").json()
    assert [b["type"] for b in body["blocks"]] == ["profile"]
    assert body["resolved"]["background"]["version"] == 1


def test_save_theme_and_background(client):
    card = SQLRepository().create_card()
    resp = client.put(f"/api/cards/{card.id}/theme", json={"primary": "#000000"})
    assert resp.status_code == 200
    assert resp.json()["theme"]["background"] == "#000000"

    resp = client.put(f"/api/cards/{card.id}/background", json={"mode": "solid", "color": "#123456"})
    assert resp.status_code == 200
    assert resp.json()["background"]["base"] == {"kind": "solid", "color": "#123456"}
    stored = SQLRepository().get_card(card.id).theme
    assert stored["primary"] == "#000000"
    assert stored["background"]["version"] == 1

    assert client.put("/api/cards/missing/background", json={}).status_code == 404


def test_presets_routes(client):
    card = SQLRepository().create_card()
    presets = client.get("/api/background-presets").json()["presets"]
    assert presets[0]["id"] == "gold-silk"
    resp = client.post(f"/api/cards/{card.id}/background/preset/black-marble")
    assert resp.status_code == 200
    assert resp.json()["background"]["overlays"][0]["kind"] == "marble"
    assert client.post(f"/api/cards/{card.id}/background/preset/nope").status_code == 404


def test_update_slug_route(client):
    repo = SQLRepository()
    repo.create_card(slug="taken")
    card = repo.create_card()

    resp = client.post("/api/cards/update-slug", json={"cardId": card.id, "newSlugRaw": "Novo Slug"})
    assert resp.json() == {"success": True, "newSlug": "novo-slug"}

    resp = client.post("/api/cards/update-slug", json={"cardId": card.id, "newSlugRaw": "taken"})
    assert resp.status_code == 409
    assert resp.json()["success"] is False

    assert client.post("/api/cards/update-slug", json={"newSlugRaw": "x"}).status_code == 400
    assert client.post("/api/cards/update-slug", json={"cardId": card.id, "newSlugRaw": "%%"}).status_code == 400
    assert client.post("/api/cards/update-slug", json={"cardId": "nope", "newSlugRaw": "free"}).status_code == 404

    check = client.get("/api/cards/slug/check", params={"value": "Novo Slug"}).json()
    assert check == {"available": False, "slug": "novo-slug"}


def test_manifest_route(client):
    SQLRepository().create_card(slug="live", published=True)
    resp = client.get("/api/manifest/live")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/manifest+json")
    assert resp.headers["cache-control"] == "public, max-age=300"
    assert resp.json()["start_url"] == "/live"


def test_write_routes_are_rate_limited(client, monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_WRITES", "2")
    core_config.get_settings.cache_clear()
    card = SQLRepository().create_card()
    statuses = [client.put(f"/api/cards/{card.id}/theme", json={}).status_code for _ in range(3)]
    assert statuses == [200, 200, 429]


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}


def test_only_declared_page_routes_exist(client):
    assert client.get("/.well-known/appspecific/com.chrome.devtools.json").status_code == 404


def test_malformed_stored_theme_still_resolves(client):
    repo = SQLRepository()
    repo.create_card(slug="velho", published=True, theme={"primary": 5, "mutedText": ["#fff"]})
    resp = client.get("/api/cards/velho/theme")
    assert resp.status_code == 200
    assert resp.json()["theme"]["primary"] == "#2563EB"
    assert client.get("/api/cards/velho").status_code == 200


def test_malformed_background_is_stored_and_read_back(client):
    card = SQLRepository().create_card(slug="riscas", published=True)
    bad = {"version": 1, "base": {"kind": "gradient", "stops": ["#fff", "#000"]}, "overlays": 5}
    assert client.put(f"/api/cards/{card.id}/background", json=bad).status_code == 200
    resp = client.get("/api/cards/riscas/theme")
    assert resp.status_code == 200
    assert resp.json()["themeColor"] == "#000000"
    assert client.put(f"/api/cards/{card.id}/theme", json={"text": "#eeeeee"}).status_code == 200
