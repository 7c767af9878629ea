from __future__ import annotations

from story_forge.application.content_cache import ContentCache


def test_put_then_get() -> None:
    cache = ContentCache()
    assert cache.get("hero") is None
    assert cache.put("hero", "Maya Chen, a chef") == "Maya Chen, a chef"
    assert cache.get("hero") == "Maya Chen, a chef"
    assert "hero" in cache
    assert len(cache) == 1


def test_invalidate_reports_only_cached_ids() -> None:
    cache = ContentCache()
    cache.put("logline", "A sentence.")
    cache.put("flaw", "pride")
    assert cache.invalidate(["logline", "theme"]) == ["logline"]
    assert cache.snapshot() == {"flaw": "pride"}


def test_snapshot_is_a_copy_and_clear_empties() -> None:
    cache = ContentCache()
    cache.put("theme", "Love")
    snapshot = cache.snapshot()
    snapshot["theme"] = "Fear"
    assert cache.get("theme") == "Love"
    cache.clear()
    assert len(cache) == 0
