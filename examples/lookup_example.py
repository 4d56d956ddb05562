"""Example script showing how to query a catalog programmatically."""
from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from apicatalog import CatalogSummary, load  # type: ignore  # noqa: E402


def main() -> None:
    root = load(Path(__file__).with_name("psychopath_root.js"))
    for descriptor in root.list_types_in_package("psychopath"):
        print(f"{descriptor.qualified_name:<24} {descriptor.kind}")
    print(CatalogSummary.from_root(root).model_dump_json(indent=2))


if __name__ == "__main__":
    main()
