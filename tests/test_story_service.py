from __future__ import annotations

import logging
import random
import re

import pytest

from story_forge.application.story_service import (
    CORE_FIELD_IDS,
    UNKNOWN_FIELD,
    declared_dependents,
    field_ids,
    generate_story,
    get_field,
    reroll,
    reroll_field,
    snapshot_fields,
)
from story_forge.core.beat_sheet import beat_field_ids
from story_forge.core.generation_audit import audit_story
from story_forge.core.genre_library import genre_names, template_for
from story_forge.core.vocabulary import THEMES
from story_forge.domain.models import Gender, StoryInstance

HERO_PATTERN = re.compile(r"^[A-Z][a-z]+ [A-Z][a-z]+, an? [a-z]")
OTHER_GENDER_WORDS = {
    Gender.FEMALE: re.compile(r"\b(?:he|him|his|himself)\b", re.IGNORECASE),
    Gender.MALE: re.compile(r"\b(?:she|her|hers|herself)\b", re.IGNORECASE),
}
QUOTED_SPEECH = re.compile(r"\"[^\"]*\"|\u201c[^\u201d]*\u201d")


def _identity_affecting(instance: StoryInstance) -> set[str]:
    affecting = {"hero", "genre", "b_story", "minor_character"}
    if template_for(instance.genre).alias_for("nemesis") is None:
        affecting.add("nemesis")
    return affecting


def test_whydunit_forgiveness_scenario() -> None:
    instance = generate_story("Whydunit", "Forgiveness", seed=101)
    assert get_field(instance, "genre") == "Whydunit"
    assert get_field(instance, "theme") == "Forgiveness"
    assert HERO_PATTERN.match(get_field(instance, "hero"))
    logline = get_field(instance, "logline")
    assert "undefined" not in logline
    assert logline.endswith((".", "!", "?"))
    assert instance.hero_identity.display_name in logline


def test_theme_reroll_keeps_the_hero() -> None:
    instance = generate_story("Whydunit", "Forgiveness", seed=5)
    hero = get_field(instance, "hero")
    new_theme = reroll_field(instance, "theme")
    assert new_theme in THEMES
    assert new_theme != "Forgiveness"
    assert get_field(instance, "theme") == new_theme
    assert get_field(instance, "hero") == hero


def test_selection_is_case_insensitive_and_random_is_a_choice() -> None:
    instance = generate_story("whydunit", "  forgiveness ", seed=1)
    assert instance.genre == "Whydunit"
    assert instance.theme == "Forgiveness"
    randomized = generate_story("random", "", seed=2)
    assert randomized.genre in genre_names()
    assert randomized.theme in THEMES


def test_same_seed_reproduces_story() -> None:
    first = snapshot_fields(generate_story("Superhero", "Trust", seed=77))
    second = snapshot_fields(generate_story("Superhero", "Trust", seed=77))
    assert first == second


def test_unknown_genre_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="story_forge.application.story_service"):
        instance = generate_story("Space Opera", "Love", seed=3)
    assert instance.genre == "Space Opera"
    assert "story.genre.fallback genre=Space Opera" in caplog.text
    logline = get_field(instance, "logline")
    assert logline.startswith(instance.hero_identity.display_name)
    assert logline.endswith("goal.")
    assert field_ids(instance) == CORE_FIELD_IDS + beat_field_ids()


def test_unknown_theme_is_kept() -> None:
    instance = generate_story("Rites of Passage", "Courage", seed=4)
    assert get_field(instance, "theme") == "Courage"
    assert "courage" in get_field(instance, "logline")


def test_get_field_is_idempotent() -> None:
    instance = generate_story("Buddy Love", "Love", seed=9)
    for field_id in field_ids(instance):
        assert get_field(instance, field_id) == get_field(instance, field_id)


def test_unknown_field_returns_sentinel(caplog: pytest.LogCaptureFixture) -> None:
    instance = generate_story("Golden Fleece", "Trust", seed=10)
    with caplog.at_level(logging.WARNING, logger="story_forge.application.story_service"):
        assert get_field(instance, "The Detective") == UNKNOWN_FIELD
        outcome = reroll(instance, "beat_Nope_Nothing")
    assert outcome.known is False
    assert outcome.text == UNKNOWN_FIELD
    assert "story.field.unknown field_id=The Detective" in caplog.text


def test_stories_do_not_share_identities() -> None:
    first = generate_story("Whydunit", "Love", seed=20)
    second = generate_story("Whydunit", "Love", seed=21)
    assert first.registry is not second.registry
    assert first.cache is not second.cache
    before = snapshot_fields(second)
    reroll_field(first, "hero")
    assert snapshot_fields(second) == before


@pytest.mark.parametrize("genre", [*genre_names(), "Space Opera"])
def test_reroll_only_changes_declared_dependents(genre: str) -> None:
    instance = generate_story(genre, "Random", rng=random.Random(f"isolation-{genre}"))
    skipped = _identity_affecting(instance)
    for field_id in field_ids(instance):
        if field_id in skipped:
            continue
        before = snapshot_fields(instance)
        allowed = {field_id, *declared_dependents(instance, field_id)}
        outcome = reroll(instance, field_id)
        after = snapshot_fields(instance)
        assert set(outcome.invalidated) <= allowed
        changed = {key for key in before if before[key] != after[key]}
        assert changed <= allowed, (field_id, changed - allowed)


def test_display_field_reroll_updates_logline() -> None:
    instance = generate_story("Monster in the House", "Fear", seed=31)
    get_field(instance, "logline")
    outcome = reroll(instance, "The Monster")
    assert "logline" in outcome.invalidated
    assert "nemesis" in outcome.invalidated
    assert get_field(instance, "nemesis") == outcome.text
    assert outcome.text in get_field(instance, "logline")


def test_coupled_elements_reroll_together() -> None:
    instance = generate_story("Buddy Love", "Love", seed=12)
    snapshot_fields(instance)
    outcome = reroll(instance, "The Counterpart")
    assert {"The Incomplete Hero", "flaw", "logline"} <= set(outcome.invalidated)
    assert outcome.text.startswith(instance.counterpart_identity.display_name + ", who ")
    assert get_field(instance, "flaw") == get_field(instance, "The Incomplete Hero")


def test_hero_reroll_invalidates_everything() -> None:
    instance = generate_story("Whydunit", "Forgiveness", seed=14)
    before = snapshot_fields(instance)
    outcome = reroll(instance, "hero")
    assert set(declared_dependents(instance, "hero")) == set(field_ids(instance)) - {"hero"}
    assert len(outcome.invalidated) == len(before) - 1
    assert HERO_PATTERN.match(outcome.text)
    assert get_field(instance, "logline") == instance.logline


def test_genre_reroll_switches_templates() -> None:
    instance = generate_story("Whydunit", "Love", seed=15)
    new_genre = reroll_field(instance, "genre")
    assert new_genre in genre_names()
    assert new_genre != "Whydunit"
    assert instance.theme == "Love"
    assert set(template_for(new_genre).display_fields) <= set(field_ids(instance))


def test_settings_stay_distinct_after_reroll() -> None:
    instance = generate_story("Golden Fleece", "Survival", seed=16)
    for _ in range(10):
        reroll_field(instance, "setting")
        reroll_field(instance, "act2_setting")
        assert get_field(instance, "setting") != get_field(instance, "act2_setting")


def test_b_story_reroll_renames_the_counterpart() -> None:
    instance = generate_story("Whydunit", "Trust", seed=17)
    before = snapshot_fields(instance)
    outcome = reroll(instance, "b_story")
    assert outcome.text.startswith(instance.counterpart_identity.display_name + ", ")
    assert set(outcome.invalidated) == set(before) - {"b_story"}
    assert set(declared_dependents(instance, "b_story")) == set(field_ids(instance)) - {"b_story"}


def test_minor_character_reroll_clears_the_whole_cache() -> None:
    instance = generate_story("Superhero", "Faith", seed=18)
    before = snapshot_fields(instance)
    outcome = reroll(instance, "minor_character")
    assert outcome.text.startswith(instance.registry.display_name_of("minor") + ", ")
    assert set(outcome.invalidated) == set(before) - {"minor_character"}
    assert len(instance.cache.snapshot()) == 1


def test_hero_reroll_draws_a_different_hero() -> None:
    instance = generate_story("Fool Triumphant", "Acceptance", seed=19)
    previous = get_field(instance, "hero")
    for _ in range(20):
        current = reroll_field(instance, "hero")
        assert current != previous
        previous = current


@pytest.mark.parametrize("genre", genre_names())
def test_no_placeholders_leak_over_many_stories(genre: str) -> None:
    rng = random.Random(f"leak-{genre}")
    snapshots = []
    for _ in range(20):
        instance = generate_story(genre, "Random", rng=rng)
        snapshots.append((instance.story_id, snapshot_fields(instance)))
    report = audit_story(snapshots)
    assert report.stories_checked == 20
    assert report.passed, [(finding.field_id, finding.text) for finding in report.findings[:5]]


def _stories_with_hero_gender(genre: str, gender: Gender, count: int) -> list[StoryInstance]:
    rng = random.Random(f"pronouns-{genre}-{gender.value}")
    stories: list[StoryInstance] = []
    while len(stories) < count:
        instance = generate_story(genre, "Random", rng=rng)
        if instance.hero_identity.gender is gender:
            stories.append(instance)
    return stories


@pytest.mark.parametrize("gender", [Gender.FEMALE, Gender.MALE])
@pytest.mark.parametrize("genre", genre_names())
def test_hero_never_gets_another_genders_pronouns(genre: str, gender: Gender) -> None:
    forbidden = OTHER_GENDER_WORDS[gender]
    for instance in _stories_with_hero_gender(genre, gender, 5):
        for field_id, text in snapshot_fields(instance).items():
            narration = QUOTED_SPEECH.sub("", text)
            assert not forbidden.search(narration), (field_id, text)
