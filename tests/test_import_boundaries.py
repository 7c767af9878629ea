from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest

ROOT = Path(__file__).resolve().parents[1]


def _load_checker_module() -> ModuleType:
    module_path = ROOT / "tools" / "check_imports.py"
    spec = importlib.util.spec_from_file_location("check_imports_tool", module_path)
    assert spec is not None
    loader = spec.loader
    assert loader is not None
    module = importlib.util.module_from_spec(spec)
    loader.exec_module(module)
    return module


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_check_file_allows_core_internal_import(tmp_path: Path) -> None:
    checker = _load_checker_module()
    source_root = tmp_path / "src" / "story_forge"
    core_file = source_root / "core" / "beats.py"
    _write(core_file, "from story_forge.core import selection\nfrom story_forge.domain.models import Cast\n")
    assert checker.check_file(core_file, source_root) == []


def test_check_file_rejects_core_importing_adapters(tmp_path: Path) -> None:
    checker = _load_checker_module()
    source_root = tmp_path / "src" / "story_forge"
    core_file = source_root / "core" / "beats.py"
    _write(core_file, "from story_forge.adapters import observability\n")
    violations = checker.check_file(core_file, source_root)
    assert len(violations) == 1
    assert "core must not import story_forge.adapters" in violations[0]


def test_check_file_rejects_relative_import_of_api(tmp_path: Path) -> None:
    checker = _load_checker_module()
    source_root = tmp_path / "src" / "story_forge"
    core_file = source_root / "core" / "beats.py"
    _write(core_file, "from ..api import app\n")
    violations = checker.check_file(core_file, source_root)
    assert violations and "core must not import story_forge.api" in violations[0]


def test_check_file_rejects_web_stack_in_core(tmp_path: Path) -> None:
    checker = _load_checker_module()
    source_root = tmp_path / "src" / "story_forge"
    core_file = source_root / "core" / "beats.py"
    _write(core_file, "import httpx\nfrom fastapi import FastAPI\n")
    violations = checker.check_file(core_file, source_root)
    assert sorted(violations) == sorted(
        [f"{core_file}: core must not import httpx", f"{core_file}: core must not import fastapi"]
    )


def test_api_layer_may_import_anything(tmp_path: Path) -> None:
    checker = _load_checker_module()
    source_root = tmp_path / "src" / "story_forge"
    api_file = source_root / "api" / "app.py"
    _write(api_file, "import fastapi\nfrom story_forge.adapters import observability\n")
    assert checker.check_file(api_file, source_root) == []


def test_project_tree_respects_boundaries(capsys: pytest.CaptureFixture[str]) -> None:
    checker = _load_checker_module()
    assert checker.check_import_boundaries() == []
    checker.main([])
    assert "import boundary checks passed" in capsys.readouterr().out
