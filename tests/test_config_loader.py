"""Tests for configuration loading and key conversion."""

import json
from pathlib import Path

from occ.config.loader import (
    camel_to_snake,
    convert_keys,
    convert_to_camel,
    get_config_path,
    load_config,
    save_config,
    snake_to_camel,
)
from occ.config.schema import Config, ToolRemovalPreset


# ── Key conversion ──────────────────────────────────────────────────


class TestCamelToSnake:
    def test_simple(self):
        assert camel_to_snake("stateDir") == "state_dir"

    def test_multiple_words(self):
        assert camel_to_snake("keepTurnsWithTools") == "keep_turns_with_tools"

    def test_single_word(self):
        assert camel_to_snake("preset") == "preset"

    def test_already_snake(self):
        assert camel_to_snake("output_format") == "output_format"

    def test_empty(self):
        assert camel_to_snake("") == ""


class TestSnakeToCamel:
    def test_simple(self):
        assert snake_to_camel("agent_id") == "agentId"

    def test_multiple_words(self):
        assert snake_to_camel("truncate_percent") == "truncatePercent"

    def test_single_word(self):
        assert snake_to_camel("verbose") == "verbose"

    def test_empty(self):
        assert snake_to_camel("") == ""


class TestConvertKeys:
    def test_nested_dict(self):
        data = {"customPresets": {"mine": {"keepTurnsWithTools": 3}}}
        assert convert_keys(data) == {"custom_presets": {"mine": {"keep_turns_with_tools": 3}}}

    def test_list_of_dicts(self):
        assert convert_keys({"items": [{"stateDir": "x"}]}) == {"items": [{"state_dir": "x"}]}

    def test_non_dict(self):
        assert convert_keys("hello") == "hello"
        assert convert_keys(None) is None


class TestConvertToCamel:
    def test_roundtrip(self):
        """camelCase → snake_case → camelCase should preserve keys."""
        original = {"stateDir": "/s", "outputFormat": "json", "strictParsing": True}
        assert convert_to_camel(convert_keys(original)) == original


# ── Config file lookup ──────────────────────────────────────────────


class TestGetConfigPath:
    def test_defaults_to_xdg_location(self):
        path = get_config_path()
        assert path == Path.home() / ".config" / "occ" / "config.json"

    def test_project_file_wins(self):
        (Path.cwd() / "occ.config.json").write_text("{}")
        (Path.cwd() / ".occrc.json").write_text("{}")
        assert get_config_path() == Path.cwd() / ".occrc.json"

    def test_home_rc_used_last(self):
        (Path.home() / ".occrc.json").write_text("{}")
        assert get_config_path() == Path.home() / ".occrc.json"


# ── Config load/save ────────────────────────────────────────────────


class TestLoadConfig:
    def test_default_when_no_file(self, tmp_path: Path):
        config = load_config(tmp_path / "nonexistent.json")
        assert isinstance(config, Config)
        assert config.preset == "default"
        assert config.output_format == "human"
        assert config.strict_parsing is False

    def test_load_camel_case_json(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({
            "stateDir": "/data/state",
            "agentId": "helper",
            "preset": "aggressive",
            "outputFormat": "json",
            "customPresets": {
                "myPreset": {"name": "myPreset", "keepTurnsWithTools": 3, "truncatePercent": 25},
            },
        }))
        config = load_config(config_file)
        assert config.state_dir == "/data/state"
        assert config.agent_id == "helper"
        assert config.preset == "aggressive"
        assert config.output_format == "json"
        # Preset names are not re-cased
        assert config.custom_presets["myPreset"].keep_turns_with_tools == 3

    def test_auto_detected_file(self):
        (Path.cwd() / ".occrc.json").write_text(json.dumps({"verbose": True}))
        assert load_config().verbose is True

    def test_invalid_json_returns_default(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text("not json{{{")
        config = load_config(config_file)
        assert config.preset == "default"

    def test_empty_file_returns_default(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text("")
        assert isinstance(load_config(config_file), Config)

    def test_invalid_values_return_default(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"outputFormat": "xml"}))
        assert load_config(config_file).output_format == "human"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"preset": "aggressive", "agentId": "file-agent"}))
        monkeypatch.setenv("OCC_PRESET", "extreme")

        config = load_config(config_file)
        assert config.preset == "extreme"
        assert config.agent_id == "file-agent"

    def test_env_only(self, monkeypatch):
        monkeypatch.setenv("OCC_OUTPUT_FORMAT", "json")
        monkeypatch.setenv("OCC_STRICT_PARSING", "true")
        config = load_config()
        assert config.output_format == "json"
        assert config.strict_parsing is True


class TestSaveConfig:
    def test_save_creates_file(self, tmp_path: Path):
        config_file = tmp_path / "subdir" / "config.json"
        save_config(Config(), config_file)
        assert config_file.exists()

    def test_save_uses_camel_case(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        save_config(Config(output_format="json", strict_parsing=True), config_file)

        data = json.loads(config_file.read_text())
        assert data["outputFormat"] == "json"
        assert data["strictParsing"] is True
        assert "stateDir" not in data

    def test_roundtrip(self, tmp_path: Path):
        """Save and reload should produce equivalent config."""
        original = Config(
            preset="tight",
            custom_presets={"tight": ToolRemovalPreset(name="tight", keep_turns_with_tools=2, truncate_percent=0)},
        )
        config_file = tmp_path / "config.json"
        save_config(original, config_file)
        loaded = load_config(config_file)

        assert loaded.preset == "tight"
        assert loaded.custom_presets == original.custom_presets
