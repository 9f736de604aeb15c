"""Tests for ruleforge CLI commands."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from ruleforge.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "RULEFORGE_PROFILES_PATH",
        "RULEFORGE_ENUMS_PATH",
        "RULEFORGE_LOG_LEVEL",
        "RULEFORGE_PORT",
    ):
        monkeypatch.delenv(name, raising=False)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestProfilesCommands:
    def test_list(self, runner):
        result = runner.invoke(cli, ["profiles", "list"])
        assert result.exit_code == 0
        assert "sound.draft (" in result.output
        assert "enum_data.create (4 fields)" in result.output

    def test_list_uses_configured_path(self, runner, monkeypatch, tmp_path):
        _write(tmp_path / "tag.yaml", "profiles:\n  tag:\n    name:\n      - rule: required\n")
        monkeypatch.setenv("RULEFORGE_PROFILES_PATH", str(tmp_path))
        result = runner.invoke(cli, ["profiles", "list"])
        assert result.exit_code == 0
        assert result.output.strip() == "tag (1 fields)"

    def test_list_missing_directory(self, runner, monkeypatch, tmp_path):
        monkeypatch.setenv("RULEFORGE_PROFILES_PATH", str(tmp_path / "missing"))
        result = runner.invoke(cli, ["profiles", "list"])
        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_show(self, runner):
        result = runner.invoke(cli, ["profiles", "show", "sound.query"])
        assert result.exit_code == 0
        data = yaml.safe_load(result.output)
        assert data["sound.query"]["statusList"][0] == {
            "rule": "stringArray",
            "message": "Status list",
        }

    def test_show_unknown(self, runner):
        result = runner.invoke(cli, ["profiles", "show", "nothing"])
        assert result.exit_code == 1
        assert "Profile 'nothing' not found" in result.output

    def test_lint_shipped_profiles(self, runner):
        result = runner.invoke(cli, ["profiles", "lint", "--strict"])
        assert result.exit_code == 0
        assert "All profiles are valid." in result.output

    def test_lint_warning(self, runner, tmp_path):
        path = _write(
            tmp_path / "tag.yaml",
            "profiles:\n  tag:\n    code:\n      - rule: upperCode\n",
        )
        result = runner.invoke(cli, ["profiles", "lint", "--path", str(path)])
        assert result.exit_code == 0
        assert "Unknown rule 'upperCode'" in result.output
        assert "1 warning(s) found." in result.output

    def test_lint_strict_fails_on_warning(self, runner, tmp_path):
        path = _write(
            tmp_path / "tag.yaml",
            "profiles:\n  tag:\n    code:\n      - rule: upperCode\n",
        )
        result = runner.invoke(cli, ["profiles", "lint", "--strict", "--path", str(path)])
        assert result.exit_code == 1
        assert "1 error(s) found" in result.output

    def test_lint_schema_error(self, runner, tmp_path):
        path = _write(tmp_path / "tag.yaml", "profiles:\n  tag:\n    code:\n      - {}\n")
        result = runner.invoke(cli, ["profiles", "lint", "--path", str(path)])
        assert result.exit_code == 1
        assert "'rule' is a required property" in result.output


class TestCheckCommand:
    def test_valid_record_from_stdin(self, runner):
        record = {"name": "Rain", "status": "DRAFT"}
        result = runner.invoke(cli, ["check", "sound.draft"], input=json.dumps(record))
        assert result.exit_code == 0
        assert "Record is valid for 'sound.draft'." in result.output

    def test_invalid_record_from_file(self, runner, tmp_path):
        path = _write(tmp_path / "sound.json", json.dumps({"name": "Rain", "status": "DRAFT"}))
        result = runner.invoke(cli, ["check", "sound", str(path)])
        assert result.exit_code == 1
        assert "genderCode is required" in result.output
        assert "error(s) found" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(
            cli,
            ["check", "sound.query", "--json"],
            input=json.dumps({"statusList": ["DRAFT", "ARCHIVED"]}),
        )
        assert result.exit_code == 1
        assert json.loads(result.output) == {
            "valid": False,
            "errors": ["Status list contains invalid values: ARCHIVED"],
        }

    def test_unknown_profile_accepts_record(self, runner):
        result = runner.invoke(cli, ["check", "nothing"], input="{}")
        assert result.exit_code == 0
        assert "no profile 'nothing'" in result.output

    def test_invalid_json(self, runner):
        result = runner.invoke(cli, ["check", "sound"], input="{not json")
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_record_must_be_object(self, runner):
        result = runner.invoke(cli, ["check", "sound"], input="[1, 2]")
        assert result.exit_code == 1
        assert "Record must be a JSON object" in result.output


class TestEnumsCommands:
    def test_list(self, runner):
        result = runner.invoke(cli, ["enums", "list"])
        assert result.exit_code == 0
        assert "BizSoundGenderEnums (3 values)" in result.output

    def test_show(self, runner):
        result = runner.invoke(cli, ["enums", "show", "BizSoundUsageEnums"])
        assert result.exit_code == 0
        assert "FLOW" in result.output
        assert "GENERAL" in result.output

    def test_show_unknown(self, runner):
        result = runner.invoke(cli, ["enums", "show", "NoSuchEnums"])
        assert result.exit_code == 1
        assert "Enum group 'NoSuchEnums' not found" in result.output


class TestGlobalOptions:
    def test_invalid_log_level(self, runner):
        result = runner.invoke(cli, ["--log-level", "verbose", "enums", "list"])
        assert result.exit_code == 2

    def test_bad_environment(self, runner, monkeypatch):
        monkeypatch.setenv("RULEFORGE_PORT", "http")
        result = runner.invoke(cli, ["enums", "list"])
        assert result.exit_code == 1
        assert "RULEFORGE_PORT" in result.output
