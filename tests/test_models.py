from __future__ import annotations

import random

import pytest

from story_forge.application.content_cache import ContentCache
from story_forge.core.genre_elements import WhydunitElements
from story_forge.core.identity_registry import IdentityRegistry
from story_forge.core.phrasing import article, as_sentence, with_article
from story_forge.domain.models import (
    HERO_ID,
    CharacterIdentity,
    ElementSet,
    Gender,
    StoryInstance,
)


def test_character_identity_display_name_and_pronouns() -> None:
    identity = CharacterIdentity("hero", "Kai", "Tanaka", Gender.NEUTRAL)
    assert identity.display_name == "Kai Tanaka"
    assert identity.pronouns.subject == "they"
    assert identity.pronouns.is_plural


def test_element_set_keys_values_and_replace() -> None:
    elements = WhydunitElements(mystery="a perfect crime", dark_turn="it implicates {possessive} family")
    assert WhydunitElements.keys() == ("mystery", "dark_turn")
    assert elements.as_dict() == {
        "mystery": "a perfect crime",
        "dark_turn": "it implicates {possessive} family",
    }
    changed = elements.with_values(mystery="a buried scandal")
    assert changed.value("mystery") == "a buried scandal"
    assert elements.value("mystery") == "a perfect crime"
    with pytest.raises(KeyError):
        elements.value("missing")
    assert ElementSet.keys() == ()


def test_story_instance_reads_identities_from_its_registry() -> None:
    registry = IdentityRegistry(random.Random(1))
    instance = StoryInstance(
        story_id="story_test",
        genre="Whydunit",
        theme="Love",
        registry=registry,
        cache=ContentCache(),
        rng=random.Random(1),
        hero_descriptor="haunted chef",
    )
    hero = instance.hero_identity
    assert registry.resolve(HERO_ID) == hero
    cast = instance.cast()
    assert cast.hero == hero
    assert cast.counterpart == instance.counterpart_identity
    assert cast.hero_descriptor == "haunted chef"


@pytest.mark.parametrize(
    ("phrase", "expected"),
    [
        ("archivist", "an"),
        ("honest broker", "an"),
        ("university dean", "a"),
        ("one-eyed pirate", "a"),
        ("chef", "a"),
        ("", "a"),
    ],
)
def test_article(phrase: str, expected: str) -> None:
    assert article(phrase) == expected


def test_with_article_and_sentences() -> None:
    assert with_article(" eccentric heir ") == "an eccentric heir"
    assert as_sentence("she runs") == "She runs."
    assert as_sentence('he says "stop!"') == 'He says "stop!"'
    assert as_sentence("") == ""
