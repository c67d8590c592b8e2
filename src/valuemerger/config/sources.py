"""Custom pydantic-settings source for the valuemerger user config file.

The user config file lives at:
- $VALUEMERGER_CONFIG_DIR/config.yaml, if the variable is set
- ~/.config/valuemerger/config.yaml otherwise

It is read with the same loader as values files, so the same YAML rules
apply (string keys, timestamps as text). A missing file is normal and
yields no settings; an unreadable or malformed one is an error.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings

import valuemerger.constants as constants
import valuemerger.errors as errors
import valuemerger.sources as sources


class ConfigFileError(Exception):
    """Error loading or parsing the configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


def get_user_config_dir() -> _pathlib.Path:
    """
    Get the user config directory.

    Respects VALUEMERGER_CONFIG_DIR environment variable if set,
    otherwise uses XDG standard path.
    """
    config_dir_env = _os.environ.get(constants.ENV_CONFIG_DIR)
    if config_dir_env:
        return _pathlib.Path(config_dir_env)
    return _pathlib.Path.home() / ".config" / "valuemerger"


def get_user_config_path() -> _pathlib.Path:
    """Get the path to the user config file."""
    return get_user_config_dir() / "config.yaml"


class YamlConfigSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that loads the user config YAML file.

    Sits below environment variables and constructor arguments in
    precedence, above field defaults.
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        *,
        config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            config_path: Override path for the config file (for testing).
                If not provided, uses VALUEMERGER_CONFIG_DIR or the XDG path.
        """
        super().__init__(settings_cls)
        self._config_path = config_path if config_path is not None else get_user_config_path()
        self._data = self._load()

    @property
    def config_path(self) -> _pathlib.Path:
        return self._config_path

    def _load(self) -> dict[str, _typing.Any]:
        path = self._config_path
        if not path.exists():
            return {}
        try:
            content = sources.read_file(str(path))
            return sources.load_values_document(content, str(path))
        except errors.ReadError as e:
            raise ConfigFileError(path, e.reason) from e
        except errors.ParseError as e:
            raise ConfigFileError(path, e.message) from e

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """Return the config file contents restricted to known fields."""
        return {
            name: self._data[name]
            for name in self.settings_cls.model_fields
            if name in self._data
        }
