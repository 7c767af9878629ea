"""Domain models and ports for story generation."""

from story_forge.domain.models import (
    Cast,
    CharacterIdentity,
    ElementSet,
    Gender,
    PronounSet,
    StoryInstance,
)
from story_forge.domain.ports import ElementGenerator, ElementRegenerator, LoglineAssembler

__all__ = [
    "Cast",
    "CharacterIdentity",
    "ElementGenerator",
    "ElementRegenerator",
    "ElementSet",
    "Gender",
    "LoglineAssembler",
    "PronounSet",
    "StoryInstance",
]
