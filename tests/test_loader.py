from __future__ import annotations

import json
from pathlib import Path

import pytest

from apicatalog import CatalogParseError, load, loads
from apicatalog.loader import strip_trailing_commas, unwrap_script


def test_load_script_form(sample_script_path: Path, sample_record: dict) -> None:
    root = load(sample_script_path)
    assert root.packages == ("psychopath",)
    assert root.docs == ()
    assert root.modules == ()
    assert root.as_record() == load(sample_record).as_record()
    assert root.types[0].modifiers == {"#": "java.util.Collections$UnmodifiableSet"}


def test_load_json_file_and_text(tmp_path: Path, sample_record: dict) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(sample_record), encoding="utf-8")
    assert load(path) == load(str(path)) == loads(json.dumps(sample_record))


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "missing.json")


def test_strip_trailing_commas_ignores_strings() -> None:
    text = '{"a": ",}", "b": [1, 2, ], "c": {"d": "\\",]",},}'
    assert json.loads(strip_trailing_commas(text)) == {"a": ",}", "b": [1, 2], "c": {"d": '",]'}}


def test_unwrap_script_keeps_positions() -> None:
    text = 'const root = {"docs": []};\n'
    unwrapped = unwrap_script(text)
    assert len(unwrapped) == len(text)
    assert unwrapped.strip() == '{"docs": []}'


@pytest.mark.parametrize("missing", ["docs", "modules", "packages", "types"])
def test_missing_top_level_field(sample_record: dict, missing: str) -> None:
    del sample_record[missing]
    with pytest.raises(CatalogParseError, match=missing):
        load(sample_record)


def test_missing_descriptor_field(sample_record: dict) -> None:
    del sample_record["types"][2]["packageName"]
    with pytest.raises(CatalogParseError) as excinfo:
        load(sample_record)
    assert excinfo.value.errors
    assert "types.2.packageName" in str(excinfo.value)


def test_wrong_field_type(sample_record: dict) -> None:
    sample_record["packages"] = "psychopath"
    with pytest.raises(CatalogParseError):
        load(sample_record)


def test_unknown_kind_rejected(sample_record: dict) -> None:
    sample_record["types"][0]["type"] = "Interface"
    with pytest.raises(CatalogParseError, match="types.0.type"):
        load(sample_record)


def test_duplicate_types_rejected(sample_record: dict) -> None:
    sample_record["types"].append(dict(sample_record["types"][0]))
    with pytest.raises(CatalogParseError, match="duplicate type 'psychopath.Directory'"):
        load(sample_record)
    root = load(sample_record, enforce_unique=False)
    assert len(root.types) == 8


def test_undeclared_package_warns_or_fails(sample_record: dict, caplog: pytest.LogCaptureFixture) -> None:
    sample_record["types"].append({"name": "Archive", "packageName": "archiver", "type": "Class"})
    with caplog.at_level("WARNING"):
        root = load(sample_record)
    assert root.undeclared_packages() == ["archiver"]
    assert "archiver" in caplog.text
    with pytest.raises(CatalogParseError, match="undeclared packages: archiver"):
        load(sample_record, strict_references=True)


def test_malformed_json_reports_position(tmp_path: Path) -> None:
    path = tmp_path / "broken.js"
    path.write_text('const root = {\n\t"docs": [\n\t"modules": []\n}\n', encoding="utf-8")
    with pytest.raises(CatalogParseError, match="line 3") as excinfo:
        load(path)
    assert excinfo.value.source == str(path)


def test_non_object_root() -> None:
    with pytest.raises(CatalogParseError, match="must be an object"):
        loads("[1, 2, 3]")


@pytest.mark.parametrize("text", ["", "   \n\t"])
def test_blank_source_rejected(text: str) -> None:
    with pytest.raises(CatalogParseError, match="empty"):
        load(text)


def test_array_text_is_parsed_not_opened() -> None:
    with pytest.raises(CatalogParseError, match="must be an object, got list"):
        load("  [1, 2]")


def test_directory_source_rejected(tmp_path: Path) -> None:
    with pytest.raises(CatalogParseError, match="directory") as excinfo:
        load(tmp_path)
    assert excinfo.value.source == str(tmp_path)


@pytest.mark.parametrize("collection", ["[,]", "{,}", "[ , ]"])
def test_lone_comma_is_not_an_empty_collection(collection: str) -> None:
    text = f'{{"docs": {collection}, "modules": [], "packages": [], "types": []}}'
    with pytest.raises(CatalogParseError, match="invalid JSON"):
        loads(text)


def test_double_comma_is_not_collapsed() -> None:
    with pytest.raises(CatalogParseError, match="invalid JSON"):
        loads('{"docs": [1,,], "modules": [], "packages": [], "types": []}')
