"""Tests for loading validation profiles from YAML."""

import logging
from pathlib import Path

import pytest

from ruleforge.profiles import ProfileLoader, load_yaml_with_duplicates
from ruleforge.validation import ProfileRegistry


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


DUPLICATED = """\
profiles:
  sound.query:
    statusList:
      - rule: stringArray
  sound.query:
    statusList:
      - rule: enumArray
        params: [[DRAFT, ENABLED]]
"""


class TestLoadYamlWithDuplicates:
    def test_reports_duplicate_keys_with_line(self, tmp_path):
        path = _write(tmp_path / "sound.yaml", DUPLICATED)
        doc, duplicates = load_yaml_with_duplicates(path)
        assert duplicates == [("sound.query", 5)]
        assert doc["profiles"]["sound.query"]["statusList"][0]["rule"] == "enumArray"

    def test_no_duplicates(self, tmp_path):
        path = _write(tmp_path / "a.yaml", "profiles:\n  a:\n    x: []\n")
        _, duplicates = load_yaml_with_duplicates(path)
        assert duplicates == []


class TestProfileLoader:
    def test_loads_every_file(self, tmp_path):
        _write(
            tmp_path / "sound.yaml",
            "profiles:\n"
            "  sound:\n"
            "    name:\n"
            "      - rule: required\n"
            "      - rule: string\n"
            "        message: Name\n",
        )
        _write(tmp_path / "music.yaml", "profiles:\n  music:\n    name:\n      - rule: required\n")
        loader = ProfileLoader(tmp_path)
        loader.load_all()

        assert loader.list_profiles() == ["music", "sound"]
        chain = loader.get_profile("sound").fields["name"]
        assert [inv.rule for inv in chain] == ["required", "string"]
        assert chain[1].message == "Name"
        assert loader.sources["music"].name == "music.yaml"
        assert loader.issues == []

    def test_duplicate_in_file_last_wins(self, tmp_path, caplog):
        _write(tmp_path / "sound.yaml", DUPLICATED)
        loader = ProfileLoader(tmp_path)
        with caplog.at_level(logging.WARNING, logger="ruleforge.profiles.loader"):
            loader.load_all()

        chain = loader.get_profile("sound.query").fields["statusList"]
        assert chain[0].rule == "enumArray"
        assert len(loader.issues) == 1
        assert loader.issues[0].severity == "warning"
        assert "Duplicate key 'sound.query'" in loader.issues[0].message
        assert "Duplicate key 'sound.query'" in caplog.text

    def test_duplicate_across_files_later_file_wins(self, tmp_path):
        _write(tmp_path / "a.yaml", "profiles:\n  sound:\n    name:\n      - rule: required\n")
        _write(tmp_path / "b.yaml", "profiles:\n  sound:\n    title:\n      - rule: required\n")
        loader = ProfileLoader(tmp_path)
        loader.load_all()

        assert list(loader.get_profile("sound").fields) == ["title"]
        assert loader.sources["sound"].name == "b.yaml"
        assert "already declared in a.yaml" in loader.issues[0].message

    def test_single_file_path(self, tmp_path):
        path = _write(tmp_path / "sound.yaml", DUPLICATED)
        loader = ProfileLoader(path)
        loader.load_all()
        assert loader.list_profiles() == ["sound.query"]

    def test_empty_file_is_skipped(self, tmp_path):
        _write(tmp_path / "empty.yaml", "")
        loader = ProfileLoader(tmp_path)
        loader.load_all()
        assert loader.list_profiles() == []

    def test_missing_directory(self, tmp_path):
        loader = ProfileLoader(tmp_path / "missing")
        with pytest.raises(ValueError, match="does not exist"):
            loader.load_all()

    def test_missing_profiles_mapping(self, tmp_path):
        _write(tmp_path / "bad.yaml", "sound:\n  name: []\n")
        with pytest.raises(ValueError, match="'profiles' mapping"):
            ProfileLoader(tmp_path).load_all()

    def test_malformed_yaml(self, tmp_path):
        _write(tmp_path / "bad.yaml", "profiles: [unclosed\n")
        with pytest.raises(ValueError, match="Failed to load profile file"):
            ProfileLoader(tmp_path).load_all()

    def test_invocation_without_rule(self, tmp_path):
        _write(tmp_path / "bad.yaml", "profiles:\n  sound:\n    name:\n      - params: [1]\n")
        with pytest.raises(ValueError, match="rule"):
            ProfileLoader(tmp_path).load_all()

    def test_register_all(self, tmp_path):
        _write(tmp_path / "sound.yaml", DUPLICATED)
        loader = ProfileLoader(tmp_path)
        loader.load_all()
        registry = ProfileRegistry()
        loader.register_all(registry)
        assert registry.list_keys() == ["sound.query"]
