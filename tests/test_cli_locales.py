import json

from typer.testing import CliRunner

from pseudoloc.cli import app

runner = CliRunner()


def test_locales_lists_builtins():
    r = runner.invoke(app, ["locales"])
    assert r.exit_code == 0, r.output
    for name in ("German", "Polish", "Russian"):
        assert name in r.output


def test_locales_accepts_profile_file():
    r = runner.invoke(app, ["locales", "--profile-file", "examples/profiles.yaml"])
    assert r.exit_code == 0, r.output
    assert "Czech" in r.output
    assert "Turkish" in r.output


def test_locales_json():
    r = runner.invoke(app, ["locales", "--format", "json"])
    assert r.exit_code == 0
    payload = json.loads(r.stdout)
    assert [d["locale"] for d in payload["locales"]] == ["German", "Polish", "Russian"]
    polish = payload["locales"][1]
    assert polish["multi_candidate_keys"] == ["Z", "z"]
    assert polish["filler"] == "ąćęłńóśżźĄĆĘŁŃÓŚŻŹ"


def test_locales_invalid_profile_file():
    r = runner.invoke(app, ["locales", "--profile-file", "examples/en.json"])
    assert r.exit_code == 2
    assert "E_PROFILE_FILE_INVALID" in r.output
