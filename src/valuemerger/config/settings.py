"""
Settings configuration using pydantic-settings.

Loads configuration from (highest precedence first):
1. Constructor arguments
2. Environment variables with VALUEMERGER_ prefix
3. User config file: ~/.config/valuemerger/config.yaml
   (or $VALUEMERGER_CONFIG_DIR/config.yaml)
4. Field defaults

Example:
    VALUEMERGER_LOG_LEVEL=DEBUG VALUEMERGER_OUTPUT_FORMAT=json valuemerger merge -f values.yaml
"""

import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import valuemerger.config.sources as sources
import valuemerger.constants as constants
import valuemerger.strvals as strvals

OutputFormat = _typing.Literal["yaml", "json"]

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(_pydantic_settings.BaseSettings):
    """
    valuemerger runtime settings.

    All settings can be overridden via environment variables with the
    VALUEMERGER_ prefix, e.g. VALUEMERGER_MAX_INDEX=1024.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        extra="ignore",
    )

    log_level: str = _pydantic.Field(
        default="WARNING",
        description="Logging level for the command line (DEBUG, INFO, WARNING, ...)",
    )
    output_format: OutputFormat = _pydantic.Field(
        default=constants.DEFAULT_OUTPUT_FORMAT,
        description="Serialization of the merged document",
    )
    max_index: int = _pydantic.Field(
        default=constants.DEFAULT_MAX_INDEX,
        ge=0,
        description="Largest list index an assignment may address",
    )
    max_nested_name_level: int = _pydantic.Field(
        default=constants.DEFAULT_MAX_NESTED_NAME_LEVEL,
        ge=0,
        description="Deepest dotted-key nesting an assignment may use",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings: constructor args (highest)
        2. env_settings (VALUEMERGER_* env vars)
        3. yaml config file
        4. defaults from the Field definitions (lowest)
        """
        return (
            init_settings,
            env_settings,
            sources.YamlConfigSettingsSource(settings_cls),
        )

    @_pydantic.field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def parser_limits(self) -> strvals.ParserLimits:
        """Bounds for assignment expressions, as configured."""
        return strvals.ParserLimits(
            max_index=self.max_index,
            max_nested_name_level=self.max_nested_name_level,
        )

    @property
    def config_path(self) -> _pathlib.Path:
        """Path of the user config file (whether or not it exists)."""
        return sources.get_user_config_path()
