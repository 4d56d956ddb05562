"""Configuration helpers for apicatalog."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, field_validator


DEFAULT_CONFIG_PATH = Path("apicatalog.yml")


class AppConfig(BaseModel):
    """Application level configuration."""

    catalog_path: Path = Field(default=Path("catalog.json"))
    enforce_unique: bool = True
    strict_references: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalise_level(cls, value: str) -> str:
        level = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}; got {value!r}")
        return level


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load configuration from a YAML file, falling back to defaults."""

    data: Dict[str, Any] = {}
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration {path} must be a mapping, got {type(data).__name__}")
    return AppConfig(**data)
