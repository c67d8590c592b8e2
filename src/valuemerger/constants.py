"""
Shared constants for valuemerger.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

STDIN_SENTINEL = "-"
"""A file reference equal to this (after trimming whitespace) reads standard input."""

# Assignment grammar bounds
DEFAULT_MAX_INDEX = 65536
"""Largest list index an assignment expression may address."""

DEFAULT_MAX_NESTED_NAME_LEVEL = 30
"""Deepest dotted-key nesting an assignment expression may use."""

# Settings
ENV_PREFIX = "VALUEMERGER_"
"""Prefix for environment variables read by Settings."""

ENV_CONFIG_DIR = "VALUEMERGER_CONFIG_DIR"
"""Environment variable overriding the user config directory."""

DEFAULT_OUTPUT_FORMAT = "yaml"
"""Default serialization for the merged document on the command line."""
