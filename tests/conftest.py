from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

SAMPLE_TYPES = [
    ("Directory", "Class"),
    ("File", "Class"),
    ("Folder", "Class"),
    ("Location", "AbstractClass"),
    ("Locator", "Class"),
    ("Option", "Class"),
    ("Progress", "Class"),
]
MODIFIERS = {"#": "java.util.Collections$UnmodifiableSet"}


@pytest.fixture(autouse=True)
def _configure_test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("COLUMNS", "120")


@pytest.fixture
def sample_record() -> dict:
    return {
        "docs": [],
        "modules": [],
        "packages": ["psychopath"],
        "types": [
            {"modifiers": dict(MODIFIERS), "name": name, "packageName": "psychopath", "type": kind}
            for name, kind in SAMPLE_TYPES
        ],
    }


@pytest.fixture
def sample_script() -> str:
    return (PROJECT_ROOT / "examples" / "psychopath_root.js").read_text(encoding="utf-8")


@pytest.fixture
def sample_script_path(tmp_path: Path, sample_script: str) -> Path:
    path = tmp_path / "root.js"
    path.write_text(sample_script, encoding="utf-8")
    return path
