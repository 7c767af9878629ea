"""Python-first client for the story_forge HTTP API."""

from __future__ import annotations

import httpx

from story_forge.api.contracts import (
    CatalogResponse,
    FieldResponse,
    RerollResponse,
    StoryCreateRequest,
    StoryResponse,
)


class StoryForgeClient:
    """Tiny typed API client for Python users."""

    def __init__(self, api_base_url: str = "http://127.0.0.1:8000", *, timeout: float = 30.0) -> None:
        """Initialize client with an API base URL."""
        self._api_base_url = api_base_url.rstrip("/")
        self._timeout = timeout

    @property
    def api_base_url(self) -> str:
        """Return normalized API base URL."""
        return self._api_base_url

    def catalog(self) -> CatalogResponse:
        """Fetch genres, themes, and beat field ids."""
        response = httpx.get(f"{self._api_base_url}/api/v1/catalog", timeout=self._timeout)
        response.raise_for_status()
        return CatalogResponse.model_validate(response.json())

    def create_story(
        self,
        *,
        genre: str = "Random",
        theme: str = "Random",
        seed: int | None = None,
    ) -> StoryResponse:
        """Generate a new story on the server."""
        request = StoryCreateRequest(genre=genre, theme=theme, seed=seed)
        response = httpx.post(
            f"{self._api_base_url}/api/v1/stories",
            json=request.model_dump(mode="json"),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return StoryResponse.model_validate(response.json())

    def get_story(self, story_id: str, *, include_beats: bool = False) -> StoryResponse:
        response = httpx.get(
            f"{self._api_base_url}/api/v1/stories/{story_id}",
            params={"include_beats": str(include_beats).lower()},
            timeout=self._timeout,
        )
        response.raise_for_status()
        return StoryResponse.model_validate(response.json())

    def get_field(self, story_id: str, field_id: str) -> FieldResponse:
        response = httpx.get(
            f"{self._api_base_url}/api/v1/stories/{story_id}/fields/{field_id}",
            timeout=self._timeout,
        )
        response.raise_for_status()
        return FieldResponse.model_validate(response.json())

    def reroll_field(self, story_id: str, field_id: str) -> RerollResponse:
        """Regenerate one field; the response lists every field it cleared."""
        response = httpx.post(
            f"{self._api_base_url}/api/v1/stories/{story_id}/fields/{field_id}/reroll",
            timeout=self._timeout,
        )
        response.raise_for_status()
        return RerollResponse.model_validate(response.json())

    def delete_story(self, story_id: str) -> None:
        response = httpx.delete(
            f"{self._api_base_url}/api/v1/stories/{story_id}",
            timeout=self._timeout,
        )
        response.raise_for_status()


__all__ = ["StoryForgeClient"]
