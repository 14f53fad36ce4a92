import json
from pathlib import Path

from pseudoloc.core.errors import CatalogLoadError
from pseudoloc.core.io.catalog_io import load_catalog, output_path_for, save_catalog


def test_load_json_success():
    catalog = load_catalog("examples/en.json")
    assert catalog["greeting"] == "hi"
    assert list(catalog)[:3] == ["greeting", "farewell", "menu.start"]
    assert catalog["empty"] == ""


def test_load_yaml_success():
    catalog = load_catalog("examples/en.yaml")
    assert catalog == {"greeting": "hi", "farewell": "bye", "menu.start": "Start Game"}


def test_load_items_layout():
    catalog = load_catalog("examples/en-items.json")
    assert catalog == {"greeting": "hi", "farewell": "bye"}


def test_load_missing_file():
    try:
        load_catalog("examples/does-not-exist.json")
        assert False, "expected CatalogLoadError"
    except CatalogLoadError as e:
        assert e.code == "E_FILE_NOT_FOUND"


def test_load_unsupported_format(tmp_path):
    p = tmp_path / "catalog.txt"
    p.write_text("hello", encoding="utf-8")
    try:
        load_catalog(str(p))
        assert False, "expected CatalogLoadError"
    except CatalogLoadError as e:
        assert e.code == "E_UNSUPPORTED_FORMAT"


def test_load_bad_json(tmp_path):
    p = tmp_path / "catalog.json"
    p.write_text("{nope", encoding="utf-8")
    try:
        load_catalog(str(p))
        assert False, "expected CatalogLoadError"
    except CatalogLoadError as e:
        assert e.code == "E_JSON_PARSE"


def test_load_top_level_not_a_mapping():
    try:
        load_catalog("examples/invalid-not-a-mapping.json")
        assert False, "expected CatalogLoadError"
    except CatalogLoadError as e:
        assert e.code == "E_INVALID_TOP_LEVEL"


def test_load_non_string_value():
    try:
        load_catalog("examples/invalid-non-string-value.json")
        assert False, "expected CatalogLoadError"
    except CatalogLoadError as e:
        assert e.code == "E_INVALID_ENTRY"
        assert e.path == "count"


def test_load_duplicate_key(tmp_path):
    p = tmp_path / "catalog.json"
    p.write_text('{"a": "x", "a": "y"}', encoding="utf-8")
    try:
        load_catalog(str(p))
        assert False, "expected CatalogLoadError"
    except CatalogLoadError as e:
        assert e.code == "E_DUPLICATE_KEY"


def test_save_json_keeps_order_and_unicode(tmp_path: Path):
    out = save_catalog({"z": "żółw", "a": "äpfel"}, tmp_path / "nested" / "out.json")
    text = out.read_text(encoding="utf-8")
    assert "żółw" in text
    assert list(json.loads(text)) == ["z", "a"]


def test_save_items_layout(tmp_path: Path):
    out = save_catalog({"k": "v"}, tmp_path / "out.json", layout="items")
    assert json.loads(out.read_text(encoding="utf-8")) == {"items": [{"key": "k", "value": "v"}]}
    assert load_catalog(out) == {"k": "v"}


def test_save_yaml(tmp_path: Path):
    out = save_catalog({"k": "ß|ä"}, tmp_path / "out.yaml")
    assert load_catalog(out) == {"k": "ß|ä"}


def test_output_path_for():
    assert output_path_for("strings/en.json", "German") == Path("strings/GermanPseudo.json")
    assert output_path_for("en.json", "Polish") == Path("PolishPseudo.json")
