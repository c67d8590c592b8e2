"""
Shared pytest fixtures for valuemerger tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import io as _io
import os as _os
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click.testing as _click_testing
import pytest as _pytest

# =============================================================================
# Environment isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def isolated_env(
    monkeypatch: _pytest.MonkeyPatch,
    tmp_path: _pathlib.Path,
) -> _pathlib.Path:
    """
    Isolate every test from the user's environment and config file.

    Clears VALUEMERGER_* variables and points the config directory at an
    empty temporary directory.

    Returns:
        The (initially empty) config directory.
    """
    for key in list(_os.environ):
        if key.startswith("VALUEMERGER_"):
            monkeypatch.delenv(key)
    config_dir = tmp_path / "config-home"
    config_dir.mkdir()
    monkeypatch.setenv("VALUEMERGER_CONFIG_DIR", str(config_dir))
    return config_dir


# =============================================================================
# Helpers
# =============================================================================


@_pytest.fixture
def write_file(tmp_path: _pathlib.Path) -> _typing.Callable[[str, str], _pathlib.Path]:
    """Factory that writes text to a file under tmp_path and returns its path."""

    def _write(name: str, content: str) -> _pathlib.Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@_pytest.fixture
def fake_stdin(monkeypatch: _pytest.MonkeyPatch) -> _typing.Callable[[bytes], None]:
    """Factory that replaces sys.stdin with a binary-backed stream."""

    def _install(data: bytes) -> None:
        monkeypatch.setattr(_sys, "stdin", _io.TextIOWrapper(_io.BytesIO(data), encoding="utf-8"))

    return _install


@_pytest.fixture
def cli_runner() -> _click_testing.CliRunner:
    """Click test runner for CLI tests."""
    return _click_testing.CliRunner()
