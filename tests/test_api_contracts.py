from __future__ import annotations

import pytest
from pydantic import ValidationError

from story_forge.api.contracts import (
    RANDOM_CHOICE,
    RerollResponse,
    StoryCreateRequest,
    StoryResponse,
)


def test_create_request_defaults_to_random_selection() -> None:
    request = StoryCreateRequest()
    assert request.genre == RANDOM_CHOICE
    assert request.theme == RANDOM_CHOICE
    assert request.seed is None


@pytest.mark.parametrize("raw", ["", "   ", "random", "RANDOM", " Random "])
def test_create_request_normalizes_blank_and_random(raw: str) -> None:
    request = StoryCreateRequest.model_validate({"genre": raw, "theme": raw})
    assert request.genre == RANDOM_CHOICE
    assert request.theme == RANDOM_CHOICE


def test_create_request_collapses_inner_whitespace() -> None:
    request = StoryCreateRequest.model_validate({"genre": "  Golden   Fleece ", "theme": "Love"})
    assert request.genre == "Golden Fleece"
    assert request.theme == "Love"


def test_create_request_rejects_unknown_keys_and_negative_seed() -> None:
    with pytest.raises(ValidationError):
        StoryCreateRequest.model_validate({"genre": "Whydunit", "mood": "dark"})
    with pytest.raises(ValidationError):
        StoryCreateRequest.model_validate({"seed": -1})


def test_create_request_rejects_non_string_genre() -> None:
    with pytest.raises(ValidationError):
        StoryCreateRequest.model_validate({"genre": 7})


def test_story_response_defaults_beats_to_empty() -> None:
    response = StoryResponse(
        story_id="story_abc",
        genre="Whydunit",
        theme="Trust",
        logline="A detective follows a lie.",
    )
    assert response.beats == {}
    assert response.core_fields == {}


def test_reroll_response_serializes_invalidated_ids() -> None:
    response = RerollResponse(
        story_id="story_abc",
        field_id="hero",
        text="Mara, a reluctant courier",
        logline="Mara must deliver the letter.",
        invalidated=["logline", "hero"],
    )
    payload = response.model_dump()
    assert payload["invalidated"] == ["logline", "hero"]
    assert payload["known"] is True
