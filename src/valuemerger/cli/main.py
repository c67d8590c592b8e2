"""
Main CLI entry point for valuemerger.

Provides the command-line interface using Click. The ``merge`` command takes
the same value flags as Helm (-f/--values, --set, --set-string, --set-json,
--set-file, --set-literal) and prints the merged document.
"""

import json as _json
import logging as _logging
import os as _os
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import rich.console as _rich_console
import rich.syntax as _rich_syntax
import yaml as _yaml

import valuemerger
import valuemerger.config as config
import valuemerger.errors as errors
import valuemerger.values as values

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


def _configure_logging(level: str) -> None:
    """Send valuemerger log records to the current stderr at ``level``."""
    package_logger = _logging.getLogger("valuemerger")
    # Drop handlers left by an earlier invocation in the same process.
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    handler = _logging.StreamHandler(_sys.stderr)
    handler.setFormatter(_logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(valuemerger.__version__, "-v", "--version", prog_name="valuemerger")
@_click.option("--debug", is_flag=True, help="Enable debug logging (overrides VALUEMERGER_LOG_LEVEL)")
@_click.pass_context
def cli(ctx: _click.Context, debug: bool) -> None:
    """valuemerger - merge values files and --set overrides into one document."""
    try:
        settings = config.Settings()
    except (config.ConfigFileError, _pydantic.ValidationError) as e:
        raise _click.ClickException(str(e)) from None

    _configure_logging("DEBUG" if debug else settings.log_level)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@_click.option(
    "-f",
    "--values",
    "value_files",
    multiple=True,
    metavar="FILE",
    help="Specify values in a YAML file ('-' reads stdin); can be given multiple times",
)
@_click.option(
    "--set",
    "set_values",
    multiple=True,
    metavar="EXPR",
    help="Set values (can specify multiple or separate values with commas: key1=val1,key2=val2)",
)
@_click.option(
    "--set-string",
    "string_values",
    multiple=True,
    metavar="EXPR",
    help="Set STRING values (can specify multiple or separate values with commas: key1=val1,key2=val2)",
)
@_click.option(
    "--set-json",
    "json_values",
    multiple=True,
    metavar="EXPR",
    help="Set JSON values (can specify multiple or separate values with commas: key1=jsonval1,key2=jsonval2)",
)
@_click.option(
    "--set-file",
    "file_values",
    multiple=True,
    metavar="EXPR",
    help="Set values from files (can specify multiple or separate values with commas: key1=path1,key2=path2)",
)
@_click.option(
    "--set-literal",
    "literal_values",
    multiple=True,
    metavar="EXPR",
    help="Set a literal STRING value",
)
@_click.option(
    "-o",
    "--output",
    "output_format",
    type=_click.Choice(["yaml", "json"]),
    default=None,
    help="Output format (default: VALUEMERGER_OUTPUT_FORMAT or yaml)",
)
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
@_click.pass_context
def merge(
    ctx: _click.Context,
    value_files: tuple[str, ...],
    set_values: tuple[str, ...],
    string_values: tuple[str, ...],
    json_values: tuple[str, ...],
    file_values: tuple[str, ...],
    literal_values: tuple[str, ...],
    output_format: str | None,
    use_color: bool | None,
) -> None:
    """Merge values files and overrides, then print the result.

    Overrides apply after all files, lowest priority first:
    --set-json, --set, --set-string, --set-file, --set-literal.

    Examples:
        valuemerger merge -f values.yaml --set image.tag=1.2
        cat values.yaml | valuemerger merge -f - -o json
        valuemerger merge --set-literal 'args=--a=1,--b=2'
    """
    settings: config.Settings = ctx.obj["settings"]
    options = values.Options(
        value_files=list(value_files),
        json_values=list(json_values),
        values=list(set_values),
        string_values=list(string_values),
        file_values=list(file_values),
        literal_values=list(literal_values),
    )

    try:
        merged = options.merge_values(limits=settings.parser_limits())
    except errors.ValuesError as e:
        _logger.debug("Merge failed", exc_info=True)
        raise _click.ClickException(str(e)) from None

    _print_document(
        merged,
        output_format or settings.output_format,
        use_color=use_color,
    )


def _print_document(
    document: dict[str, _typing.Any],
    output_format: str,
    *,
    use_color: bool | None,
) -> None:
    if output_format == "json":
        _click.echo(_json.dumps(document, indent=2))
        return
    yaml_text = _yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
    color_enabled, force_color = _should_use_color(use_color)
    _print_yaml(yaml_text, color=color_enabled, force_color=force_color)


def _should_use_color(cli_flag: bool | None) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. NO_COLOR env var (if set, disable color) - standard convention
    3. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
        force_color is True when color was explicitly requested (not auto-detected).
    """
    if cli_flag is not None:
        return (cli_flag, cli_flag)

    # https://no-color.org/
    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)

    return (_sys.stdout.isatty(), False)


def _print_yaml(yaml_text: str, *, color: bool = True, force_color: bool = False) -> None:
    """Print YAML text, optionally with syntax highlighting."""
    if not color:
        _click.echo(yaml_text, nl=False)
        return

    # force_terminal/no_color/color_system override NO_COLOR and FORCE_COLOR
    # when color was explicitly requested with --color.
    console = _rich_console.Console(
        force_terminal=force_color,
        no_color=False if force_color else None,
        color_system="truecolor" if force_color else "auto",
    )
    syntax = _rich_syntax.Syntax(
        yaml_text,
        "yaml",
        theme="monokai",
        background_color="default",
    )
    console.print(syntax)


@cli.group(name="config", invoke_without_command=True)
@_click.pass_context
def config_cmd(ctx: _click.Context) -> None:
    """Configuration commands.

    Without a subcommand, shows where settings come from.
    """
    if ctx.invoked_subcommand is None:
        settings: config.Settings = ctx.obj["settings"]
        _click.echo("valuemerger Configuration:")
        _click.echo(f"  Config File: {settings.config_path}")
        _click.echo(f"  Log Level: {settings.log_level}")
        _click.echo(f"  Output Format: {settings.output_format}")
        _click.echo("\nRun 'valuemerger config show' for full configuration details.")


@config_cmd.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def config_show(ctx: _click.Context, as_json: bool) -> None:
    """Show effective settings from environment, config file and defaults."""
    settings: config.Settings = ctx.obj["settings"]
    data = settings.model_dump(mode="json")
    if as_json:
        _click.echo(_json.dumps(data, indent=2))
    else:
        _click.echo(_yaml.safe_dump(data, default_flow_style=False, sort_keys=False), nl=False)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
