"""Ports for genre element generation and logline assembly."""

from __future__ import annotations

import random
from typing import Protocol

from story_forge.domain.models import Cast, ElementSet


class ElementGenerator(Protocol):
    """Draws a fresh ElementSet for one genre."""

    def __call__(self, rng: random.Random) -> ElementSet:
        ...


class ElementRegenerator(Protocol):
    """Redraws one element key (and any keys coupled to it)."""

    def __call__(self, element_key: str, elements: ElementSet, rng: random.Random) -> ElementSet:
        ...


class LoglineAssembler(Protocol):
    """Builds the one-sentence logline from cast, elements, and theme."""

    def __call__(self, cast: Cast, elements: ElementSet, theme: str) -> str:
        ...
