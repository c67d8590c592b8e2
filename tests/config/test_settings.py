"""Tests for Settings and the YAML config file source."""

import pathlib as _pathlib

import pydantic as _pydantic
import pytest as _pytest

import valuemerger.config as config
import valuemerger.config.sources as sources
import valuemerger.strvals as strvals


class TestDefaults:
    """Settings with no environment and no config file."""

    def test_defaults(self) -> None:
        """Field defaults apply."""
        settings = config.Settings()
        assert settings.log_level == "WARNING"
        assert settings.output_format == "yaml"
        assert settings.max_index == 65536
        assert settings.max_nested_name_level == 30

    def test_parser_limits(self) -> None:
        """parser_limits() reflects the configured bounds."""
        settings = config.Settings(max_index=10, max_nested_name_level=3)
        assert settings.parser_limits() == strvals.ParserLimits(
            max_index=10,
            max_nested_name_level=3,
        )

    def test_default_limits_match_parser_defaults(self) -> None:
        """Unconfigured settings give the parser's own defaults."""
        assert config.Settings().parser_limits() == strvals.DEFAULT_LIMITS


class TestEnvironment:
    """VALUEMERGER_* environment variables."""

    def test_env_overrides_default(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Environment variables override defaults."""
        monkeypatch.setenv("VALUEMERGER_MAX_INDEX", "128")
        monkeypatch.setenv("VALUEMERGER_OUTPUT_FORMAT", "json")
        settings = config.Settings()
        assert settings.max_index == 128
        assert settings.output_format == "json"

    def test_log_level_is_normalized(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Log levels are case-insensitive."""
        monkeypatch.setenv("VALUEMERGER_LOG_LEVEL", " debug ")
        assert config.Settings().log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        """Unknown log levels are rejected."""
        with _pytest.raises(_pydantic.ValidationError):
            config.Settings(log_level="LOUD")

    def test_invalid_output_format(self) -> None:
        """Only yaml and json are supported."""
        with _pytest.raises(_pydantic.ValidationError):
            config.Settings(output_format="toml")  # type: ignore[arg-type]

    def test_negative_max_index(self) -> None:
        """Limits must be non-negative."""
        with _pytest.raises(_pydantic.ValidationError):
            config.Settings(max_index=-1)

    def test_constructor_beats_env(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Constructor arguments have the highest precedence."""
        monkeypatch.setenv("VALUEMERGER_MAX_INDEX", "128")
        assert config.Settings(max_index=7).max_index == 7


class TestConfigFile:
    """The user config file layer."""

    def test_config_path_uses_env_dir(self, isolated_env: _pathlib.Path) -> None:
        """VALUEMERGER_CONFIG_DIR selects the config directory."""
        assert sources.get_user_config_path() == isolated_env / "config.yaml"
        assert config.Settings().config_path == isolated_env / "config.yaml"

    def test_default_config_dir(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Without the env var, the XDG location is used."""
        monkeypatch.delenv("VALUEMERGER_CONFIG_DIR")
        assert sources.get_user_config_dir() == _pathlib.Path.home() / ".config" / "valuemerger"

    def test_file_values_are_loaded(self, isolated_env: _pathlib.Path) -> None:
        """Settings come from config.yaml when present."""
        (isolated_env / "config.yaml").write_text("output_format: json\nmax_index: 99\n")
        settings = config.Settings()
        assert settings.output_format == "json"
        assert settings.max_index == 99

    def test_env_beats_file(
        self,
        isolated_env: _pathlib.Path,
        monkeypatch: _pytest.MonkeyPatch,
    ) -> None:
        """Environment variables override the config file."""
        (isolated_env / "config.yaml").write_text("max_index: 99\n")
        monkeypatch.setenv("VALUEMERGER_MAX_INDEX", "5")
        assert config.Settings().max_index == 5

    def test_unknown_keys_are_ignored(self, isolated_env: _pathlib.Path) -> None:
        """Keys that are not settings do not cause errors."""
        (isolated_env / "config.yaml").write_text("something_else: 1\nlog_level: info\n")
        assert config.Settings().log_level == "INFO"

    def test_empty_file(self, isolated_env: _pathlib.Path) -> None:
        """An empty config file is fine."""
        (isolated_env / "config.yaml").write_text("")
        assert config.Settings().max_index == 65536

    def test_malformed_file(self, isolated_env: _pathlib.Path) -> None:
        """Malformed YAML raises ConfigFileError naming the file."""
        path = isolated_env / "config.yaml"
        path.write_text("max_index: [\n")
        with _pytest.raises(config.ConfigFileError) as exc_info:
            config.Settings()
        assert exc_info.value.path == path

    def test_source_with_explicit_path(self, tmp_path: _pathlib.Path) -> None:
        """The source can be pointed at any file."""
        path = tmp_path / "custom.yaml"
        path.write_text("log_level: ERROR\nnot_a_field: x\n")
        source = sources.YamlConfigSettingsSource(config.Settings, config_path=path)
        assert source.config_path == path
        assert source() == {"log_level": "ERROR"}
        assert source.get_field_value(None, "log_level") == (  # type: ignore[arg-type]
            "ERROR",
            "log_level",
            False,
        )
