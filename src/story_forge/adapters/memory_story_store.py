"""Bounded, process-local store of live stories for the HTTP layer."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from story_forge.domain.models import StoryInstance

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 256


class InMemoryStoryStore:
    """Maps story ids to live stories, evicting the oldest when full.

    Nothing here survives a restart. Each story gets its own lock so two
    requests never mutate the same instance at once.
    """

    def __init__(self, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError(f"max_sessions must be >= 1, got {max_sessions}.")
        self._max_sessions = max_sessions
        self._stories: OrderedDict[str, StoryInstance] = OrderedDict()
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    @property
    def max_sessions(self) -> int:
        return self._max_sessions

    def add(self, instance: StoryInstance) -> None:
        with self._guard:
            self._stories[instance.story_id] = instance
            self._stories.move_to_end(instance.story_id)
            self._locks.setdefault(instance.story_id, threading.Lock())
            while len(self._stories) > self._max_sessions:
                evicted, _ = self._stories.popitem(last=False)
                self._locks.pop(evicted, None)
                logger.info("story.store.evicted story_id=%s", evicted)

    def get(self, story_id: str) -> StoryInstance | None:
        with self._guard:
            return self._stories.get(story_id)

    def remove(self, story_id: str) -> bool:
        with self._guard:
            self._locks.pop(story_id, None)
            return self._stories.pop(story_id, None) is not None

    def lock_for(self, story_id: str) -> threading.Lock:
        """Lock of a stored story; raises `KeyError` once it is gone."""
        with self._guard:
            return self._locks[story_id]

    def checkout(self, story_id: str) -> tuple[StoryInstance, threading.Lock] | None:
        """Story and its lock read together, or None when the id is unknown."""
        with self._guard:
            instance = self._stories.get(story_id)
            if instance is None:
                return None
            return instance, self._locks[story_id]

    def story_ids(self) -> list[str]:
        with self._guard:
            return list(self._stories)

    def __len__(self) -> int:
        with self._guard:
            return len(self._stories)

    def __contains__(self, story_id: object) -> bool:
        with self._guard:
            return story_id in self._stories
