from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from story_forge.adapters import observability
from story_forge.adapters.observability import configure_runtime_logging, int_env


def test_int_env_clamps_and_ignores_junk(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORY_FORGE_TEST_INT", "999")
    assert int_env("STORY_FORGE_TEST_INT", 5, minimum=1, maximum=100) == 100
    monkeypatch.setenv("STORY_FORGE_TEST_INT", "0")
    assert int_env("STORY_FORGE_TEST_INT", 5, minimum=1, maximum=100) == 1
    monkeypatch.setenv("STORY_FORGE_TEST_INT", "many")
    assert int_env("STORY_FORGE_TEST_INT", 5, minimum=1, maximum=100) == 5
    monkeypatch.delenv("STORY_FORGE_TEST_INT")
    assert int_env("STORY_FORGE_TEST_INT", 5, minimum=1, maximum=100) == 5


def test_configure_runtime_logging_installs_rotating_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    log_path = tmp_path / "logs" / "story_forge.log"
    monkeypatch.setenv("STORY_FORGE_LOG_PATH", str(log_path))
    monkeypatch.setenv("STORY_FORGE_LOG_LEVEL", "debug")
    monkeypatch.setenv("STORY_FORGE_LOG_BACKUP_COUNT", "3")
    monkeypatch.setattr(observability, "_CONFIGURED", False)
    try:
        configure_runtime_logging()
        file_handlers = [handler for handler in root.handlers if isinstance(handler, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].backupCount == 3
        assert root.level == logging.DEBUG
        assert log_path.parent.is_dir()
        before = list(root.handlers)
        configure_runtime_logging()
        assert root.handlers == before
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
