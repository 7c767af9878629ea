from __future__ import annotations

from typing import Any

from fastapi.testclient import TestClient

from story_forge.adapters.memory_story_store import InMemoryStoryStore
from story_forge.api.app import create_app
from story_forge.application.story_service import UNKNOWN_FIELD
from story_forge.core.beat_sheet import beat_field_ids
from story_forge.core.vocabulary import THEMES


def _client(max_sessions: int = 16) -> TestClient:
    return TestClient(create_app(InMemoryStoryStore(max_sessions=max_sessions)))


def _create(client: TestClient, **payload: object) -> dict[str, Any]:
    response = client.post("/api/v1/stories", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health_endpoint_returns_ok_payload() -> None:
    response = _client().get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "story_forge"}


def test_openapi_and_root_are_available() -> None:
    client = _client()
    openapi = client.get("/openapi.json")
    assert openapi.status_code == 200
    assert openapi.json()["info"]["title"] == "story_forge API"
    root = client.get("/api/v1").json()
    assert root["name"] == "story_forge"
    assert root["persistence"] == "memory"
    assert "/api/v1/stories/{story_id}/fields/{field_id}/reroll" in root["endpoints"]


def test_catalog_lists_genres_themes_and_beats() -> None:
    payload = _client().get("/api/v1/catalog").json()
    assert len(payload["genres"]) == 10
    assert all(len(genre["display_fields"]) == 3 for genre in payload["genres"])
    assert payload["themes"] == list(THEMES)
    assert len(payload["beats"]) == 15
    assert "logline" in payload["core_field_ids"]


def test_create_and_read_story() -> None:
    client = _client()
    story = _create(client, genre="whydunit", theme="Forgiveness", seed=3)
    assert story["genre"] == "Whydunit"
    assert story["theme"] == "Forgiveness"
    assert set(story["genre_fields"]) == {"The Detective", "The Secret", "The Dark Turn"}
    assert story["core_fields"]["logline"] == story["logline"]
    assert story["beats"] == {}

    fetched = client.get(f"/api/v1/stories/{story['story_id']}", params={"include_beats": "true"})
    assert fetched.status_code == 200
    payload = fetched.json()
    assert payload["logline"] == story["logline"]
    assert set(payload["beats"]) == set(beat_field_ids())


def test_same_seed_gives_same_fields() -> None:
    client = _client()
    first = _create(client, genre="Superhero", theme="Trust", seed=99)
    second = _create(client, genre="Superhero", theme="Trust", seed=99)
    assert first["story_id"] != second["story_id"]
    assert first["core_fields"] == second["core_fields"]


def test_field_read_and_reroll() -> None:
    client = _client()
    story = _create(client, genre="Whydunit", theme="Forgiveness", seed=4)
    story_id = story["story_id"]

    hero = client.get(f"/api/v1/stories/{story_id}/fields/hero").json()
    assert hero == {"story_id": story_id, "field_id": "hero", "text": story["core_fields"]["hero"], "known": True}

    rerolled = client.post(f"/api/v1/stories/{story_id}/fields/theme/reroll")
    assert rerolled.status_code == 200
    payload = rerolled.json()
    assert payload["text"] in THEMES
    assert payload["text"] != "Forgiveness"
    assert "logline" in payload["invalidated"]
    assert client.get(f"/api/v1/stories/{story_id}/fields/hero").json()["text"] == hero["text"]


def test_unknown_field_returns_sentinel() -> None:
    client = _client()
    story_id = _create(client, genre="Golden Fleece", seed=5)["story_id"]
    response = client.get(f"/api/v1/stories/{story_id}/fields/The Monster")
    assert response.status_code == 200
    assert response.json()["text"] == UNKNOWN_FIELD
    assert response.json()["known"] is False
    reroll = client.post(f"/api/v1/stories/{story_id}/fields/nope/reroll").json()
    assert reroll["known"] is False
    assert reroll["invalidated"] == []


def test_unknown_story_is_404_and_delete_removes() -> None:
    client = _client()
    assert client.get("/api/v1/stories/story_missing").status_code == 404
    assert client.get("/api/v1/stories/story_missing").json() == {"detail": "Story not found"}
    assert client.post("/api/v1/stories/story_missing/fields/hero/reroll").status_code == 404
    story_id = _create(client)["story_id"]
    assert client.delete(f"/api/v1/stories/{story_id}").status_code == 204
    assert client.get(f"/api/v1/stories/{story_id}").status_code == 404
    assert client.delete(f"/api/v1/stories/{story_id}").status_code == 404


def test_request_validation() -> None:
    client = _client()
    assert client.post("/api/v1/stories", json={"genre": "Whydunit", "mood": "dark"}).status_code == 422
    assert client.post("/api/v1/stories", json={"seed": -1}).status_code == 422
    story = _create(client, genre="   ", theme="RANDOM")
    assert story["theme"] in THEMES


def test_store_evicts_oldest_story() -> None:
    client = _client(max_sessions=1)
    first = _create(client, seed=1)["story_id"]
    second = _create(client, seed=2)["story_id"]
    assert client.get(f"/api/v1/stories/{first}").status_code == 404
    assert client.get(f"/api/v1/stories/{second}").status_code == 200


def test_cors_headers_for_local_origin() -> None:
    response = _client().get("/healthz", headers={"Origin": "http://localhost:5173"})
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
