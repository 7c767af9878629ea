"""Per-story identity registry: names, genders, and pronouns by character id."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from story_forge.core import vocabulary
from story_forge.core.selection import pick
from story_forge.domain.models import CharacterIdentity, Gender, PronounSet

logger = logging.getLogger(__name__)

GENDER_WEIGHTS: tuple[tuple[Gender, float], ...] = (
    (Gender.FEMALE, 45),
    (Gender.MALE, 45),
    (Gender.NEUTRAL, 10),
)


@dataclass(frozen=True)
class NamePools:
    """Gender-scoped first-name pools plus a shared surname pool."""

    female: tuple[str, ...]
    male: tuple[str, ...]
    neutral: tuple[str, ...]
    surnames: tuple[str, ...]

    def first_names(self, gender: Gender) -> tuple[str, ...]:
        if gender is Gender.FEMALE:
            return self.female
        if gender is Gender.MALE:
            return self.male
        return self.neutral


DEFAULT_NAME_POOLS = NamePools(
    female=vocabulary.FEMALE_FIRST_NAMES,
    male=vocabulary.MALE_FIRST_NAMES,
    neutral=vocabulary.NEUTRAL_FIRST_NAMES,
    surnames=vocabulary.SURNAMES,
)


class IdentityRegistry:
    """Assigns and remembers one identity per character id within a story.

    Each story owns its own registry. Resolving the same id twice always
    returns the same identity until the entry is forgotten or the registry
    is reset.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        name_pools: NamePools = DEFAULT_NAME_POOLS,
    ) -> None:
        self._rng = rng or random.Random()
        self._pools = name_pools
        self._identities: dict[str, CharacterIdentity] = {}

    def resolve(self, character_id: str, *, gender: Gender | None = None) -> CharacterIdentity:
        """Return the stored identity, creating it on first reference.

        `gender` only applies when the identity is created; an existing entry
        is never changed by a later call.
        """
        existing = self._identities.get(character_id)
        if existing is not None:
            return existing
        chosen = gender or pick(
            [item for item, _ in GENDER_WEIGHTS],
            [weight for _, weight in GENDER_WEIGHTS],
            rng=self._rng,
        )
        identity = CharacterIdentity(
            character_id=character_id,
            first_name=self._fresh_first_name(chosen),
            surname=pick(self._pools.surnames, rng=self._rng),
            gender=chosen,
        )
        self._identities[character_id] = identity
        logger.debug(
            "identity.created character_id=%s gender=%s", character_id, identity.gender.value
        )
        return identity

    def _fresh_first_name(self, gender: Gender) -> str:
        pool = self._pools.first_names(gender)
        taken = {identity.first_name for identity in self._identities.values()}
        available = [name for name in pool if name not in taken]
        return pick(available or pool, rng=self._rng)

    def first_name_of(self, character_id: str) -> str:
        return self.resolve(character_id).first_name

    def display_name_of(self, character_id: str) -> str:
        return self.resolve(character_id).display_name

    def pronouns_of(self, character_id: str) -> PronounSet:
        return self.resolve(character_id).pronouns

    def forget(self, character_id: str) -> None:
        """Drop one identity so the next reference recreates it."""
        self._identities.pop(character_id, None)

    def reset(self) -> None:
        self._identities.clear()

    def character_ids(self) -> list[str]:
        return list(self._identities)

    def __contains__(self, character_id: object) -> bool:
        return character_id in self._identities

    def __len__(self) -> int:
        return len(self._identities)
