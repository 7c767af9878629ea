from __future__ import annotations

import random

from story_forge.core.identity_registry import IdentityRegistry, NamePools
from story_forge.domain.models import Gender, PronounSet, pronouns_for


def test_resolve_is_stable_until_forgotten() -> None:
    registry = IdentityRegistry(random.Random(1))
    first = registry.resolve("hero")
    for _ in range(10):
        assert registry.resolve("hero") == first
    registry.forget("hero")
    assert "hero" not in registry
    recreated = registry.resolve("hero")
    assert recreated.character_id == "hero"


def test_gender_hint_only_applies_on_creation() -> None:
    registry = IdentityRegistry(random.Random(2))
    created = registry.resolve("hero", gender=Gender.NEUTRAL)
    assert created.gender is Gender.NEUTRAL
    assert registry.resolve("hero", gender=Gender.MALE).gender is Gender.NEUTRAL


def test_pronouns_follow_gender() -> None:
    registry = IdentityRegistry(random.Random(3))
    identity = registry.resolve("hero", gender=Gender.FEMALE)
    assert registry.pronouns_of("hero") == PronounSet("she", "her", "her", "hers", "herself")
    assert identity.pronouns == pronouns_for(Gender.FEMALE)
    assert pronouns_for(Gender.NEUTRAL).is_plural
    assert not pronouns_for(Gender.MALE).is_plural


def test_first_names_stay_distinct_within_a_story() -> None:
    registry = IdentityRegistry(random.Random(4))
    names = {registry.resolve(f"character_{index}", gender=Gender.MALE).first_name for index in range(8)}
    assert len(names) == 8


def test_registries_do_not_share_identities() -> None:
    first = IdentityRegistry(random.Random(5))
    second = IdentityRegistry(random.Random(6))
    first.resolve("hero")
    assert "hero" not in second
    assert len(second) == 0


def test_reset_clears_every_identity() -> None:
    registry = IdentityRegistry(random.Random(7))
    registry.resolve("hero")
    registry.resolve("b_story")
    assert sorted(registry.character_ids()) == ["b_story", "hero"]
    registry.reset()
    assert len(registry) == 0


def test_custom_name_pools_are_used() -> None:
    pools = NamePools(female=("Ada",), male=("Bo",), neutral=("Cy",), surnames=("Dee",))
    registry = IdentityRegistry(random.Random(8), name_pools=pools)
    identity = registry.resolve("hero", gender=Gender.FEMALE)
    assert identity.display_name == "Ada Dee"
    assert registry.display_name_of("hero") == "Ada Dee"
    assert registry.first_name_of("hero") == "Ada"
