"""Typer-based command line interface for apicatalog."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from .errors import CatalogParseError
from .loader import load
from .schema import TYPE_KINDS, CatalogRoot, CatalogSummary
from .utils.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from .utils.logging import configure_logging
from .writer import dump, export_table

app = typer.Typer(add_completion=False, help="Inspect read-only API documentation catalogs.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="YAML configuration file."),
) -> None:
    try:
        app_config = load_config(config)
    except (ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc
    configure_logging("DEBUG" if verbose else app_config.log_level)
    ctx.obj = app_config


def _open_catalog(ctx: typer.Context, catalog: Optional[Path], strict: Optional[bool] = None) -> CatalogRoot:
    config: AppConfig = ctx.obj
    path = catalog or config.catalog_path
    if not path.exists():
        raise typer.BadParameter(f"Catalog {path} not found")
    strict_references = config.strict_references if strict is None else strict
    try:
        return load(path, enforce_unique=config.enforce_unique, strict_references=strict_references)
    except CatalogParseError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc


@app.command()
def show(
    ctx: typer.Context,
    catalog: Optional[Path] = typer.Argument(None, help="Catalog file (.json or .js)."),
    package: Optional[str] = typer.Option(None, "--package", help="Only list types of this package."),
    kind: Optional[str] = typer.Option(None, "--kind", help="Only list Class or AbstractClass types."),
) -> None:
    if kind is not None and kind not in TYPE_KINDS:
        raise typer.BadParameter(f"kind must be one of {', '.join(TYPE_KINDS)}")
    root = _open_catalog(ctx, catalog)
    descriptors = root.list_types(kind=kind, package_name=package)
    table = Table(title=f"{len(descriptors)} types")
    table.add_column("Package")
    table.add_column("Name")
    table.add_column("Kind")
    for descriptor in descriptors:
        table.add_row(descriptor.package_name, descriptor.name, descriptor.kind)
    Console().print(table)


@app.command()
def lookup(
    ctx: typer.Context,
    package: str = typer.Argument(..., help="Owning package name."),
    name: str = typer.Argument(..., help="Simple type name."),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Catalog file (.json or .js)."),
) -> None:
    root = _open_catalog(ctx, catalog)
    descriptor = root.lookup_type(package, name)
    if descriptor is None:
        typer.echo(f"Type {package}.{name} not found", err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(descriptor.as_record(), indent=2))


@app.command()
def summarize(
    ctx: typer.Context,
    catalog: Optional[Path] = typer.Argument(None, help="Catalog file (.json or .js)."),
) -> None:
    root = _open_catalog(ctx, catalog)
    typer.echo(CatalogSummary.from_root(root).model_dump_json(indent=2))


@app.command()
def validate(
    ctx: typer.Context,
    catalog: Optional[Path] = typer.Argument(None, help="Catalog file (.json or .js)."),
    strict: bool = typer.Option(False, "--strict", help="Treat undeclared packages as errors."),
) -> None:
    root = _open_catalog(ctx, catalog, strict=strict or None)
    message = f"OK: {len(root.types)} types in {len(root.packages)} packages"
    undeclared = root.undeclared_packages()
    if undeclared:
        message += f" ({len(undeclared)} undeclared)"
    typer.echo(message)


@app.command()
def convert(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="Catalog to read."),
    target: Path = typer.Argument(..., help="File to write."),
    format: Optional[str] = typer.Option(None, "--format", help="json or js; defaults to the target suffix."),
) -> None:
    if format is not None and format not in ("json", "js"):
        raise typer.BadParameter("format must be 'json' or 'js'")
    root = _open_catalog(ctx, source)
    dump(root, target, format=format)  # type: ignore[arg-type]
    typer.echo(f"Wrote {len(root.types)} types to {target}")


@app.command()
def export(
    ctx: typer.Context,
    catalog: Path = typer.Argument(..., help="Catalog file (.json or .js)."),
    out: Path = typer.Option(Path("catalog/types.parquet"), "--out", help="Parquet or CSV output path."),
) -> None:
    root = _open_catalog(ctx, catalog)
    export_table(root, out)
    typer.echo(f"Exported catalog to {out}")


if __name__ == "__main__":
    app()
