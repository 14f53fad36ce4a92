import json
from pathlib import Path

from typer.testing import CliRunner

from pseudoloc.cli import app

runner = CliRunner()


def _render(tmp_path: Path, locale: str = "German") -> Path:
    out_path = tmp_path / f"{locale}Pseudo.json"
    r = runner.invoke(app, ["render", "examples/en.json", "--out", str(out_path), "-l", locale])
    assert r.exit_code == 0, r.output
    return out_path


def test_check_rendered_catalog(tmp_path: Path):
    out_path = _render(tmp_path, "Polish")
    r = runner.invoke(app, ["check", "examples/en.json", str(out_path), "-l", "Polish"])
    assert r.exit_code == 0, r.output
    assert "OK: 8 entries match Polish" in r.output


def test_check_tampered_catalog(tmp_path: Path):
    out_path = _render(tmp_path)
    data = json.loads(out_path.read_text(encoding="utf-8"))
    data["greeting"] = data["greeting"] + "ä"
    out_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    r = runner.invoke(app, ["check", "examples/en.json", str(out_path)])
    assert r.exit_code == 2
    assert "L_FILLER_LENGTH" in r.output


def test_check_wrong_locale_json(tmp_path: Path):
    out_path = _render(tmp_path, "German")
    r = runner.invoke(
        app, ["check", "examples/en.json", str(out_path), "-l", "Russian", "--format", "json"]
    )
    assert r.exit_code == 2
    payload = json.loads(r.stdout)
    assert payload["command"] == "check"
    assert payload["ok"] is False
    codes = {e["code"] for e in payload["errors"]}
    assert "L_FILLER_CHARACTER" in codes
    assert all(e["source"] == "check" for e in payload["errors"])


def test_check_missing_pseudo_file():
    r = runner.invoke(app, ["check", "examples/en.json", "examples/nope.json"])
    assert r.exit_code == 1
    assert "E_FILE_NOT_FOUND" in r.output
