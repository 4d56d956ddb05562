"""Serialise catalogs back to JSON, script form, or a flat table."""
from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Optional

from .schema import CatalogRoot
from .utils.logging import get_logger

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


LOGGER = get_logger(__name__)

OutputFormat = Literal["json", "js"]
TABLE_COLUMNS = ("name", "packageName", "type", "modifiers")


def dumps(root: CatalogRoot, *, indent: Optional[int] = 2, sort_keys: bool = False) -> str:
    """Return the catalog as JSON text using the catalog field names."""

    return json.dumps(root.as_record(), indent=indent, sort_keys=sort_keys, ensure_ascii=False)


def dumps_script(root: CatalogRoot, *, variable: str = "root") -> str:
    """Return the catalog as a ``const <variable> = {...}`` script."""

    body = json.dumps(root.as_record(), indent="\t", sort_keys=True, ensure_ascii=False)
    return f"const {variable} = {body}\n"


def _infer_format(path: Path) -> OutputFormat:
    return "js" if path.suffix.lower() in {".js", ".mjs"} else "json"


def dump(root: CatalogRoot, path: Path, *, format: Optional[OutputFormat] = None) -> Path:
    """Write ``root`` to ``path``; the format follows the suffix unless given."""

    path = Path(path)
    output_format = format or _infer_format(path)
    if output_format not in ("json", "js"):
        raise ValueError(f"format must be 'json' or 'js'; got {output_format!r}")
    text = dumps_script(root) if output_format == "js" else dumps(root) + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    LOGGER.info("Wrote %s catalog to %s", output_format, path)
    return path


def to_frame(root: CatalogRoot) -> "pd.DataFrame":
    """Return the ``types`` collection as a DataFrame, one row per type."""

    import pandas as pd

    rows = []
    for descriptor in root.types:
        record = descriptor.as_record()
        record["modifiers"] = json.dumps(record["modifiers"], sort_keys=True, ensure_ascii=False)
        rows.append(record)
    return pd.DataFrame(rows, columns=list(TABLE_COLUMNS))


def export_table(root: CatalogRoot, path: Path) -> Path:
    """Export the types table to Parquet, or CSV when ``path`` ends in ``.csv``."""

    path = Path(path)
    df = to_frame(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".csv":
        df.to_csv(path, index=False)
    else:
        df.to_parquet(path, index=False)
    LOGGER.info("Exported %d types to %s", len(df), path)
    return path
