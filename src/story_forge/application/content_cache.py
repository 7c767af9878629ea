"""Per-story field text cache."""

from __future__ import annotations

from collections.abc import Iterable


class ContentCache:
    """Maps field ids to generated text for one story."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get(self, field_id: str) -> str | None:
        return self._entries.get(field_id)

    def put(self, field_id: str, text: str) -> str:
        self._entries[field_id] = text
        return text

    def invalidate(self, field_ids: Iterable[str]) -> list[str]:
        """Drop the given entries; returns the ids that were actually cached."""
        dropped: list[str] = []
        for field_id in field_ids:
            if self._entries.pop(field_id, None) is not None:
                dropped.append(field_id)
        return dropped

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> dict[str, str]:
        return dict(self._entries)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
