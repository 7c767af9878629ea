from __future__ import annotations

import pytest

from story_forge.adapters.memory_story_store import InMemoryStoryStore
from story_forge.application.story_service import generate_story


def test_add_get_remove() -> None:
    store = InMemoryStoryStore(max_sessions=4)
    instance = generate_story("Whydunit", "Love", seed=1)
    store.add(instance)
    assert store.get(instance.story_id) is instance
    assert instance.story_id in store
    assert store.remove(instance.story_id) is True
    assert store.remove(instance.story_id) is False
    assert store.get(instance.story_id) is None


def test_oldest_story_is_evicted_when_full() -> None:
    store = InMemoryStoryStore(max_sessions=2)
    stories = [generate_story("Superhero", "Trust", seed=seed) for seed in range(3)]
    for instance in stories:
        store.add(instance)
    assert len(store) == 2
    assert store.story_ids() == [stories[1].story_id, stories[2].story_id]
    assert store.get(stories[0].story_id) is None


def test_lock_is_stable_per_story() -> None:
    store = InMemoryStoryStore()
    instance = generate_story("Golden Fleece", "Faith", seed=2)
    store.add(instance)
    assert store.lock_for(instance.story_id) is store.lock_for(instance.story_id)
    assert store.max_sessions == 256


def test_rejects_non_positive_capacity() -> None:
    with pytest.raises(ValueError):
        InMemoryStoryStore(max_sessions=0)


def test_removed_or_evicted_story_has_no_lock() -> None:
    store = InMemoryStoryStore(max_sessions=1)
    first = generate_story("Whydunit", "Trust", seed=3)
    second = generate_story("Whydunit", "Trust", seed=4)
    store.add(first)
    store.add(second)
    with pytest.raises(KeyError):
        store.lock_for(first.story_id)
    assert store.checkout(first.story_id) is None
    store.remove(second.story_id)
    with pytest.raises(KeyError):
        store.lock_for(second.story_id)
    assert store._locks == {}


def test_checkout_returns_story_with_its_lock() -> None:
    store = InMemoryStoryStore()
    instance = generate_story("Buddy Love", "Love", seed=5)
    store.add(instance)
    checked_out = store.checkout(instance.story_id)
    assert checked_out is not None
    story, lock = checked_out
    assert story is instance
    assert lock is store.lock_for(instance.story_id)
