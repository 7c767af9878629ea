"""Core story domain models."""

from __future__ import annotations

import random
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from story_forge.application.content_cache import ContentCache
    from story_forge.core.identity_registry import IdentityRegistry

HERO_ID = "hero"
COUNTERPART_ID = "b_story"
MINOR_ID = "minor"
NEMESIS_ID = "nemesis"


class Gender(str, Enum):
    """Grammatical gender assigned to a character for one story."""

    FEMALE = "female"
    MALE = "male"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class PronounSet:
    """Pronoun forms for one gender."""

    subject: str
    object: str
    possessive: str
    possessive_alone: str
    reflexive: str

    @property
    def is_plural(self) -> bool:
        """Neutral they/them takes plural verb agreement."""
        return self.subject == "they"


PRONOUN_SETS: dict[Gender, PronounSet] = {
    Gender.FEMALE: PronounSet("she", "her", "her", "hers", "herself"),
    Gender.MALE: PronounSet("he", "him", "his", "his", "himself"),
    Gender.NEUTRAL: PronounSet("they", "them", "their", "theirs", "themselves"),
}


def pronouns_for(gender: Gender) -> PronounSet:
    return PRONOUN_SETS[gender]


@dataclass(frozen=True)
class CharacterIdentity:
    """A character's persisted name, gender, and pronoun bundle for one story."""

    character_id: str
    first_name: str
    surname: str
    gender: Gender

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.surname}"

    @property
    def pronouns(self) -> PronounSet:
        return pronouns_for(self.gender)


@dataclass(frozen=True)
class ElementSet:
    """Base record for one genre's decomposed logline components.

    Subclasses declare string fields. Values may carry explicit pronoun
    tokens and are rendered for the hero whenever they are displayed.
    """

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        return tuple(item.name for item in fields(cls))

    def value(self, key: str) -> str:
        if key not in self.keys():
            raise KeyError(key)
        return str(getattr(self, key))

    def as_dict(self) -> dict[str, str]:
        return {key: self.value(key) for key in self.keys()}

    def with_values(self, **changes: str) -> ElementSet:
        return replace(self, **changes)


@dataclass(frozen=True)
class Cast:
    """Identities and descriptors a logline assembler needs."""

    hero: CharacterIdentity
    counterpart: CharacterIdentity
    hero_descriptor: str = ""


@dataclass
class StoryInstance:
    """Mutable story aggregate; replaced wholesale by the next generate."""

    story_id: str
    genre: str
    theme: str
    registry: IdentityRegistry
    cache: ContentCache
    rng: random.Random
    elements: ElementSet = ElementSet()
    logline: str = ""
    hero: str = ""
    hero_descriptor: str = ""
    flaw: str = ""
    nemesis: str = ""
    setting: str = ""
    act2_setting: str = ""
    b_story_type: str = ""
    nemesis_name: str = ""
    minor_character_type: str = ""

    @property
    def hero_identity(self) -> CharacterIdentity:
        return self.registry.resolve(HERO_ID)

    @property
    def counterpart_identity(self) -> CharacterIdentity:
        return self.registry.resolve(COUNTERPART_ID)

    def cast(self) -> Cast:
        return Cast(
            hero=self.hero_identity,
            counterpart=self.counterpart_identity,
            hero_descriptor=self.hero_descriptor,
        )
