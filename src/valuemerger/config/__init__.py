"""
Configuration module for valuemerger.

Uses pydantic-settings for environment variable and config file loading.
"""

from valuemerger.config.settings import OutputFormat, Settings
from valuemerger.config.sources import ConfigFileError

__all__ = ["ConfigFileError", "OutputFormat", "Settings"]
