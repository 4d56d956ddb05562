"""Readers turning JSON or script-form catalog documents into :class:`CatalogRoot`."""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from .errors import CatalogParseError
from .schema import CatalogRoot
from .utils.logging import get_logger


LOGGER = get_logger(__name__)

# Documentation tooling ships the index as ``const root = {...}``.
SCRIPT_ASSIGNMENT = re.compile(r"^\s*(?:export\s+)?(?:const|let|var)\s+[A-Za-z_$][\w$]*\s*=")

CatalogSource = Union[Path, str, bytes, Mapping[str, Any]]


def unwrap_script(text: str) -> str:
    """Blank out a leading ``const <name> =`` and a trailing ``;``.

    Characters are replaced with spaces rather than removed so that JSON
    error positions still point at the original line and column.
    """

    match = SCRIPT_ASSIGNMENT.match(text)
    if match is None:
        return text
    prefix = re.sub(r"\S", " ", match.group(0))
    body = prefix + text[match.end():]
    stripped = body.rstrip()
    if stripped.endswith(";"):
        body = stripped[:-1] + " " + body[len(stripped):]
    return body


def _follows_value(chars: list[str], comma: int) -> bool:
    index = comma - 1
    while index >= 0 and chars[index].isspace():
        index -= 1
    return index >= 0 and chars[index] not in "[{,:"


def strip_trailing_commas(text: str) -> str:
    """Remove commas directly preceding ``}`` or ``]`` outside string literals.

    A comma with no value before it (``[,]``) is left for the JSON parser to
    reject.
    """

    chars: list[str] = []
    in_string = False
    escaped = False
    for char in text:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "}]":
            index = len(chars) - 1
            while index >= 0 and chars[index].isspace():
                index -= 1
            if index >= 0 and chars[index] == "," and _follows_value(chars, index):
                chars[index] = " "
        chars.append(char)
    return "".join(chars)


def _describe_errors(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(item) for item in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    count = len(parts)
    noun = "error" if count == 1 else "errors"
    return f"{count} validation {noun}: " + "; ".join(parts)


def from_mapping(
    data: Any,
    *,
    enforce_unique: bool = True,
    strict_references: bool = False,
    source: Optional[str] = None,
) -> CatalogRoot:
    """Validate an already-decoded document."""

    if not isinstance(data, Mapping):
        raise CatalogParseError(
            f"catalog root must be an object, got {type(data).__name__}", source=source
        )
    context: Dict[str, bool] = {
        "enforce_unique": enforce_unique,
        "strict_references": strict_references,
    }
    try:
        root = CatalogRoot.model_validate(dict(data), context=context)
    except ValidationError as exc:
        raise CatalogParseError(
            _describe_errors(exc), source=source, errors=exc.errors(include_url=False)
        ) from exc
    for package_name in root.undeclared_packages():
        LOGGER.warning("Type package %r is not listed in packages", package_name)
    LOGGER.debug(
        "Loaded catalog with %d types across %d packages", len(root.types), len(root.packages)
    )
    return root


def loads(
    text: Union[str, bytes],
    *,
    enforce_unique: bool = True,
    strict_references: bool = False,
    source: Optional[str] = None,
) -> CatalogRoot:
    """Parse catalog text in JSON or ``const root = {...}`` form."""

    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CatalogParseError(f"catalog is not valid UTF-8: {exc}", source=source) from exc
    body = strip_trailing_commas(unwrap_script(text.lstrip("\ufeff")))
    try:
        data = json.loads(body)
    except json.JSONDecodeError as exc:
        raise CatalogParseError(
            f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}", source=source
        ) from exc
    return from_mapping(
        data, enforce_unique=enforce_unique, strict_references=strict_references, source=source
    )


def _looks_like_document(text: str) -> bool:
    stripped = text.lstrip("\ufeff \t\r\n")
    return stripped.startswith(("{", "[")) or SCRIPT_ASSIGNMENT.match(stripped) is not None


def load(
    source: CatalogSource,
    *,
    enforce_unique: bool = True,
    strict_references: bool = False,
) -> CatalogRoot:
    """Load a catalog from a path, document text, bytes or a decoded mapping.

    Strings that start like a document (``{``, ``[`` or ``const x =``) are
    parsed directly; any other non-blank string is treated as a filesystem
    path.
    """

    options = {"enforce_unique": enforce_unique, "strict_references": strict_references}
    if isinstance(source, Mapping):
        return from_mapping(source, **options)
    if isinstance(source, bytes):
        return loads(source, **options)
    if isinstance(source, str) and not source.strip():
        raise CatalogParseError("catalog source is empty")
    if isinstance(source, str) and _looks_like_document(source):
        return loads(source, **options)
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Catalog {path} does not exist")
    if path.is_dir():
        raise CatalogParseError("expected a catalog file, got a directory", source=str(path))
    LOGGER.debug("Reading catalog from %s", path)
    return loads(path.read_bytes(), source=str(path), **options)
