from __future__ import annotations

from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from story_forge.adapters.memory_story_store import InMemoryStoryStore
from story_forge.api.app import create_app
from story_forge.api.python_interface import StoryForgeClient


def _story_payload(story_id: str = "story_abc") -> dict[str, Any]:
    return {
        "story_id": story_id,
        "genre": "Whydunit",
        "theme": "Forgiveness",
        "logline": "Obsessed by her need for the truth, Maya Chen must solve a perfect crime before it implicates her family.",
        "core_fields": {"hero": "Maya Chen, a stubborn chef"},
        "genre_fields": {"The Secret": "a perfect crime"},
        "beats": {},
    }


def test_client_normalizes_base_url() -> None:
    assert StoryForgeClient("http://127.0.0.1:8000/").api_base_url == "http://127.0.0.1:8000"


def test_create_story_posts_selection(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[dict[str, Any]] = []

    def fake_post(url: str, json: object = None, timeout: float = 0.0) -> httpx.Response:
        seen.append({"url": url, "json": json})
        return httpx.Response(status_code=201, request=httpx.Request("POST", url), json=_story_payload())

    monkeypatch.setattr("story_forge.api.python_interface.httpx.post", fake_post)
    story = StoryForgeClient().create_story(genre="Whydunit", theme="Forgiveness", seed=7)
    assert story.story_id == "story_abc"
    assert story.genre_fields["The Secret"] == "a perfect crime"
    assert seen == [
        {
            "url": "http://127.0.0.1:8000/api/v1/stories",
            "json": {"genre": "Whydunit", "theme": "Forgiveness", "seed": 7},
        }
    ]


def test_reroll_field_parses_response(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_post(url: str, json: object = None, timeout: float = 0.0) -> httpx.Response:
        assert url.endswith("/api/v1/stories/story_abc/fields/theme/reroll")
        return httpx.Response(
            status_code=200,
            request=httpx.Request("POST", url),
            json={
                "story_id": "story_abc",
                "field_id": "theme",
                "text": "Trust",
                "known": True,
                "logline": "A sentence.",
                "invalidated": ["logline"],
            },
        )

    monkeypatch.setattr("story_forge.api.python_interface.httpx.post", fake_post)
    outcome = StoryForgeClient().reroll_field("story_abc", "theme")
    assert outcome.text == "Trust"
    assert outcome.invalidated == ["logline"]


def test_get_story_raises_for_missing_story(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_get(url: str, params: object = None, timeout: float = 0.0) -> httpx.Response:
        return httpx.Response(
            status_code=404,
            request=httpx.Request("GET", url),
            json={"detail": "Story not found"},
        )

    monkeypatch.setattr("story_forge.api.python_interface.httpx.get", fake_get)
    with pytest.raises(httpx.HTTPStatusError):
        StoryForgeClient().get_story("story_missing")


def test_get_field_and_delete(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_get(url: str, params: object = None, timeout: float = 0.0) -> httpx.Response:
        return httpx.Response(
            status_code=200,
            request=httpx.Request("GET", url),
            json={"story_id": "story_abc", "field_id": "flaw", "text": "pride", "known": True},
        )

    deleted: list[str] = []

    def fake_delete(url: str, timeout: float = 0.0) -> httpx.Response:
        deleted.append(url)
        return httpx.Response(status_code=204, request=httpx.Request("DELETE", url))

    monkeypatch.setattr("story_forge.api.python_interface.httpx.get", fake_get)
    monkeypatch.setattr("story_forge.api.python_interface.httpx.delete", fake_delete)
    client = StoryForgeClient()
    assert client.get_field("story_abc", "flaw").text == "pride"
    client.delete_story("story_abc")
    assert deleted == ["http://127.0.0.1:8000/api/v1/stories/story_abc"]


def test_client_talks_to_the_real_app(monkeypatch: pytest.MonkeyPatch) -> None:
    test_client = TestClient(create_app(InMemoryStoryStore(max_sessions=4)))

    def fake_post(url: str, json: object = None, timeout: float = 0.0) -> httpx.Response:
        return test_client.post(url, json=json)

    def fake_get(url: str, params: object = None, timeout: float = 0.0) -> httpx.Response:
        return test_client.get(url, params=params)

    monkeypatch.setattr("story_forge.api.python_interface.httpx.post", fake_post)
    monkeypatch.setattr("story_forge.api.python_interface.httpx.get", fake_get)
    client = StoryForgeClient("http://testserver")
    catalog = client.catalog()
    assert len(catalog.genres) == 10
    story = client.create_story(genre="Monster in the House", theme="Fear", seed=11)
    outcome = client.reroll_field(story.story_id, "The Monster")
    assert "nemesis" in outcome.invalidated
    refreshed = client.get_story(story.story_id, include_beats=True)
    assert refreshed.genre_fields["The Monster"] == outcome.text
    assert refreshed.beats
