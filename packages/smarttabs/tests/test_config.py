"""Tests for smarttabs.config -- validation and settings files."""

from __future__ import annotations

import json

import pytest

from smarttabs.config import SmartTabsConfig, load_config
from smarttabs.errors import ConfigError


class TestDefaults:
    def test_default_values(self) -> None:
        config = SmartTabsConfig()
        assert config.delete_trailing_whitespace_on_newline is True
        assert config.one_tab_indent is True
        assert config.tab_space_jump is True
        assert config.internal_step == 80


class TestValidation:
    """Bad values fail when the config is built."""

    @pytest.mark.parametrize("step", [0, -5, True, "80", 1.5])
    def test_bad_internal_step(self, step: object) -> None:
        with pytest.raises(ConfigError):
            SmartTabsConfig(internal_step=step)  # type: ignore[arg-type]

    def test_flag_must_be_bool(self) -> None:
        with pytest.raises(ConfigError):
            SmartTabsConfig(one_tab_indent="yes")  # type: ignore[arg-type]

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            SmartTabsConfig(internal_step=0)


class TestFromDict:
    def test_camel_case_keys(self) -> None:
        config = SmartTabsConfig.from_dict({"oneTabIndent": False, "internalStep": 40})
        assert config.one_tab_indent is False
        assert config.internal_step == 40

    def test_snake_case_keys(self) -> None:
        config = SmartTabsConfig.from_dict({"tab_space_jump": False})
        assert config.tab_space_jump is False

    def test_none_values_ignored(self) -> None:
        assert SmartTabsConfig.from_dict({"internalStep": None}).internal_step == 80

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="unknown setting"):
            SmartTabsConfig.from_dict({"tabWidth": 4})

    def test_with_overrides_validates(self) -> None:
        config = SmartTabsConfig()
        assert config.with_overrides(internalStep=40).internal_step == 40
        with pytest.raises(ConfigError):
            config.with_overrides(internal_step=0)


class TestLoadConfig:
    """Settings file precedence: file < project file < overrides."""

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        assert load_config(str(tmp_path / "missing.json")) == SmartTabsConfig()

    def test_reads_file(self, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"oneTabIndent": False, "internalStep": 40}))
        config = load_config(str(path))
        assert config.one_tab_indent is False
        assert config.internal_step == 40

    def test_project_file_overrides_global(self, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"internalStep": 40, "tabSpaceJump": False}))
        project = tmp_path / "proj" / ".smarttabs"
        project.mkdir(parents=True)
        (project / "settings.json").write_text(json.dumps({"internalStep": 20}))

        config = load_config(str(path), cwd=str(tmp_path / "proj"))
        assert config.internal_step == 20
        assert config.tab_space_jump is False

    def test_overrides_win_and_none_is_skipped(self, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"internalStep": 40}))
        assert load_config(str(path), overrides={"internalStep": 16}).internal_step == 16
        assert load_config(str(path), overrides={"internalStep": None}).internal_step == 40

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="cannot read settings"):
            load_config(str(path))

    def test_non_object_json(self, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_invalid_step_in_file(self, tmp_path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"internalStep": 0}))
        with pytest.raises(ConfigError):
            load_config(str(path))
