from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from apicatalog.utils.config import AppConfig, load_config
from apicatalog.utils.logging import get_logger


def test_load_config_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.yml")
    assert isinstance(config, AppConfig)
    assert config.catalog_path == Path("catalog.json")
    assert config.enforce_unique is True
    assert config.strict_references is False


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "apicatalog.yml"
    path.write_text("strict_references: true\nlog_level: debug\n", encoding="utf-8")
    config = load_config(path)
    assert config.strict_references is True
    assert config.log_level == "DEBUG"


def test_load_config_rejects_bad_level(tmp_path: Path) -> None:
    path = tmp_path / "apicatalog.yml"
    path.write_text("log_level: loud\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)


def test_get_logger_default_name() -> None:
    assert get_logger().name == "apicatalog"
    assert get_logger("apicatalog.loader").name == "apicatalog.loader"


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "apicatalog.yml"
    path.write_text("- catalog.json\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a mapping"):
        load_config(path)
