"""
CLI module for valuemerger.

Provides the command-line interface using Click.
"""

from valuemerger.cli.main import cli, main

__all__ = ["main", "cli"]
