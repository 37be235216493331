"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics,
top-level key summaries, and parsed tree output.
"""

from __future__ import annotations

import json
from typing import NoReturn

import typer
import yaml

from .errors import ConfigError
from .node import Node


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, ConfigError):
        typer.secho(f"{command_name} failed: {exc.detail}", fg=typer.colors.RED, err=True)
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def echo_check_summary(root: Node) -> None:
    """Print the top-level key count and one `<key> <kind>` row per key."""

    typer.echo(f"OK: {len(root)} top-level key(s)")
    for key, child in root.children.items():
        typer.echo(f"{key} {child.kind.value}")


def echo_keys(root: Node) -> None:
    """Print top-level keys in document order."""

    for key in root.keys():
        typer.echo(key)


def render_tree_lines(node: Node, indent: int = 0) -> list[str]:
    """Render a node in the block config grammar, two spaces per level."""

    prefix = " " * indent
    if node.is_scalar:
        return [f"{prefix}{_display_scalar(node.value)}"]

    lines: list[str] = []
    if node.is_mapping:
        for key, child in node.children.items():
            if child.is_scalar:
                lines.append(f"{prefix}{key}: {_display_scalar(child.value)}")
            else:
                lines.append(f"{prefix}{key}:")
                lines.extend(render_tree_lines(child, indent + 2))
        return lines

    for item in node.items:
        if item.is_scalar:
            lines.append(f"{prefix}- {_display_scalar(item.value)}")
        else:
            lines.append(f"{prefix}-")
            lines.extend(render_tree_lines(item, indent + 2))
    return lines


def _display_scalar(value: str) -> str:
    return value if value else '""'


def echo_node(node: Node, output_format: str) -> None:
    """Print a node as `tree`, `json`, or `yaml` text."""

    if output_format == "json":
        typer.echo(json.dumps(node.to_python(), indent=2, ensure_ascii=False))
        return
    if output_format == "yaml":
        typer.echo(
            yaml.safe_dump(node.to_python(), sort_keys=False, allow_unicode=True).rstrip("\n")
        )
        return
    for line in render_tree_lines(node):
        typer.echo(line)
