"""Command-line interface for blockconf.

Responsibilities:
- Expose user-facing commands to validate and inspect config files.
- Map config failures to concise diagnostics and exit code 1.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from enum import Enum
import os
from pathlib import Path
from typing import Annotated

import typer

from .cli_rendering import echo_check_summary, echo_keys, echo_node, exit_with_command_error
from .conv import normalize_optional_string
from .errors import ConfigError, ConfigNotLoadedError
from .node import Node
from .registry import ConfigRegistry
from .telemetry.logger import configure_cli_logging

app = typer.Typer(
    name="blockconf",
    no_args_is_help=True,
    help="Validate and inspect block config files.",
)

_LOG_LEVEL_ENV_KEY = "BLOCKCONF_LOG_LEVEL"
_DEFAULT_LOG_LEVEL = "INFO"


class OutputFormat(str, Enum):
    """Output formats supported by `show`."""

    TREE = "tree"
    JSON = "json"
    YAML = "yaml"


def _resolve_log_level(cli_value: str | None) -> str:
    """Resolve log level with `--log-level` > env > default precedence."""

    return (
        normalize_optional_string(cli_value)
        or normalize_optional_string(os.environ.get(_LOG_LEVEL_ENV_KEY))
        or _DEFAULT_LOG_LEVEL
    ).upper()


def _load_root(config_path: Path) -> Node:
    """Load a config file through a fresh registry and return its root."""

    registry = ConfigRegistry()
    registry.load(config_path)
    root = registry.current_root
    if root is None:
        raise ConfigNotLoadedError()
    return root


@app.callback()
def main_options(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log parse and dispatch events to stderr."),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help=f"Log level for --verbose (env: {_LOG_LEVEL_ENV_KEY})."),
    ] = None,
) -> None:
    """Configure global options shared by all commands."""

    if verbose:
        configure_cli_logging(level=_resolve_log_level(log_level))


@app.command("check")
def check_command(
    config_path: Annotated[Path, typer.Argument(help="Config file to validate.")],
) -> None:
    """Parse a config file and summarize its top-level keys."""

    try:
        root = _load_root(config_path)
    except ConfigError as exc:
        exit_with_command_error("check", exc)
    echo_check_summary(root)


@app.command("show")
def show_command(
    config_path: Annotated[Path, typer.Argument(help="Config file to print.")],
    key: Annotated[
        str | None,
        typer.Option("--key", "-k", help="Print only this top-level key."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format."),
    ] = OutputFormat.TREE,
) -> None:
    """Print the parsed config tree."""

    try:
        root = _load_root(config_path)
        node = root
        if key is not None:
            selected = root.get(key)
            if selected is None:
                raise ConfigError(
                    detail=f"Key `{key}` not found in `{config_path}`.",
                    hint="Run `blockconf keys <path>` to list available keys.",
                )
            node = selected
    except ConfigError as exc:
        exit_with_command_error("show", exc)
    echo_node(node, output_format.value)


@app.command("keys")
def keys_command(
    config_path: Annotated[Path, typer.Argument(help="Config file to inspect.")],
) -> None:
    """List top-level keys in document order."""

    try:
        root = _load_root(config_path)
    except ConfigError as exc:
        exit_with_command_error("keys", exc)
    echo_keys(root)


def main() -> None:
    """Run the blockconf CLI."""

    app()
