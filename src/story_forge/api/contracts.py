"""Typed contracts shared by API handlers and Python interfaces."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

RANDOM_CHOICE = "Random"


class ContractModel(BaseModel):
    """Base model config used by all API contracts."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


def _normalize_choice(value: object) -> object:
    """Blank or any casing of "random" means let the generator choose."""
    if value is None:
        return RANDOM_CHOICE
    if not isinstance(value, str):
        return value
    cleaned = " ".join(value.split())
    if not cleaned or cleaned.lower() == RANDOM_CHOICE.lower():
        return RANDOM_CHOICE
    return cleaned


class StoryCreateRequest(ContractModel):
    """Genre and theme selection for a new story."""

    genre: str = Field(default=RANDOM_CHOICE, max_length=120)
    theme: str = Field(default=RANDOM_CHOICE, max_length=120)
    seed: int | None = Field(default=None, ge=0, le=2**63 - 1)

    @field_validator("genre", "theme", mode="before")
    @classmethod
    def _normalize_selection(cls, value: object) -> object:
        return _normalize_choice(value)


class StoryResponse(ContractModel):
    """Story summary: core fields, the genre's three fields, and optionally beats."""

    story_id: str
    genre: str
    theme: str
    logline: str
    core_fields: dict[str, str] = Field(default_factory=dict)
    genre_fields: dict[str, str] = Field(default_factory=dict)
    beats: dict[str, str] = Field(default_factory=dict)


class FieldResponse(ContractModel):
    story_id: str
    field_id: str
    text: str
    known: bool = True


class RerollResponse(ContractModel):
    """New text for the rerolled field plus every cached field it cleared."""

    story_id: str
    field_id: str
    text: str
    known: bool = True
    logline: str
    invalidated: list[str] = Field(default_factory=list)


class GenreSummary(ContractModel):
    name: str
    description: str
    display_fields: list[str] = Field(default_factory=list)


class BeatSummary(ContractModel):
    name: str
    act: str
    prompt: str
    field_ids: list[str] = Field(default_factory=list)


class CatalogResponse(ContractModel):
    """Everything a client needs to build selection menus and field routes."""

    genres: list[GenreSummary] = Field(default_factory=list)
    themes: list[str] = Field(default_factory=list)
    core_field_ids: list[str] = Field(default_factory=list)
    beats: list[BeatSummary] = Field(default_factory=list)


__all__ = [
    "BeatSummary",
    "CatalogResponse",
    "ContractModel",
    "FieldResponse",
    "GenreSummary",
    "RANDOM_CHOICE",
    "RerollResponse",
    "StoryCreateRequest",
    "StoryResponse",
]
