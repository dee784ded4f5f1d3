"""Tests for pi.console.settings -- JSON-backed console settings."""

from __future__ import annotations

import json

import pytest

from pi.console.errors import ConfigurationError
from pi.console.settings import (
    DEFAULT_ALPHABET,
    DEFAULT_PROMPT,
    ConsoleSettings,
    default_settings_path,
    load_settings,
    save_settings,
    settings_from_dict,
    settings_to_dict,
)


class TestDefaults:
    def test_default_values(self) -> None:
        settings = ConsoleSettings()
        assert settings.prompt == DEFAULT_PROMPT
        assert settings.alphabet == DEFAULT_ALPHABET
        assert "help" in settings.commands

    def test_default_commands_are_not_shared(self) -> None:
        first = ConsoleSettings()
        first.commands["extra"] = "x"
        assert "extra" not in ConsoleSettings().commands


class TestFromDict:
    def test_missing_keys_use_defaults(self) -> None:
        settings = settings_from_dict({"prompt": "# "})
        assert settings.prompt == "# "
        assert settings.alphabet == DEFAULT_ALPHABET

    def test_round_trip(self) -> None:
        settings = ConsoleSettings(prompt="> ", alphabet="abc", commands={"ab": "AB"})
        assert settings_from_dict(settings_to_dict(settings)) == settings

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {"prompt": 3},
            {"alphabet": ["a", "b"]},
            {"commands": ["quit"]},
            {"commands": {"go": 1}},
        ],
    )
    def test_invalid_values(self, data) -> None:
        with pytest.raises(ConfigurationError):
            settings_from_dict(data)


class TestLoadSave:
    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        assert load_settings(tmp_path / "nope.json") == ConsoleSettings()

    def test_save_then_load(self, tmp_path) -> None:
        path = tmp_path / "nested" / "console.json"
        settings = ConsoleSettings(prompt="pi> ", commands={"ping": "pong"})
        assert save_settings(settings, path) == path
        assert load_settings(path) == settings

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "console.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_undecodable_file(self, tmp_path) -> None:
        path = tmp_path / "console.json"
        path.write_bytes(b"\xff\xfe")
        with pytest.raises(ConfigurationError):
            load_settings(path)

    def test_default_path_honours_config_dir(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("PI_CONFIG_DIR", str(tmp_path))
        assert default_settings_path() == tmp_path / "console.json"

        (tmp_path / "console.json").write_text(json.dumps({"prompt": "env> "}))
        assert load_settings().prompt == "env> "
