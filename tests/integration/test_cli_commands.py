"""CLI tests for config validation and inspection commands."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pytest import MonkeyPatch
from typer.testing import CliRunner
import yaml

from blockconf.cli import _resolve_log_level, app


def _write_config(tmp_path: Path, text: str, name: str = "config.yml") -> Path:
    """Write config text into a temporary file and return its path."""

    config_path = tmp_path / name
    config_path.write_text(text, encoding="utf-8")
    return config_path


def test_check_command_summarizes_top_level_keys(tmp_path: Path, scenario_a_text: str) -> None:
    """`check` should report key count and one kind row per key."""

    config_path = _write_config(tmp_path, scenario_a_text)

    result = CliRunner().invoke(app, ["check", str(config_path)])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "OK: 3 top-level key(s)",
        "app mapping",
        "list sequence",
        "unknown mapping",
    ]


def test_check_command_reports_parse_errors(tmp_path: Path) -> None:
    """`check` should fail with the positional parse diagnostic."""

    config_path = _write_config(tmp_path, "a:\n  - 1\n  b: 2\n")

    result = CliRunner().invoke(app, ["check", str(config_path)])

    assert result.exit_code == 1
    assert f"check failed: {config_path} line 3: mixed mapping and sequence" in result.output


def test_check_command_reports_missing_file_with_hint(tmp_path: Path) -> None:
    """`check` should print a read failure and its hint."""

    result = CliRunner().invoke(app, ["check", str(tmp_path / "missing.yml")])

    assert result.exit_code == 1
    assert "check failed: Failed to read config file" in result.output
    assert "Hint: Verify the file exists and is readable." in result.output


def test_check_command_rejects_sequence_root(tmp_path: Path) -> None:
    """`check` should reject documents whose root is a list."""

    config_path = _write_config(tmp_path, "- a\n- b\n")

    result = CliRunner().invoke(app, ["check", str(config_path)])

    assert result.exit_code == 1
    assert "check failed: config root must be a mapping" in result.output


def test_show_command_renders_tree(tmp_path: Path) -> None:
    """`show` should print the normalized tree in block grammar."""

    config_path = _write_config(
        tmp_path,
        'app:\n    name: "MyApp" # comment\n    empty:\nlist:\n  - a\n  -\n    k: v\n',
    )

    result = CliRunner().invoke(app, ["show", str(config_path)])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "app:",
        "  name: MyApp",
        '  empty: ""',
        "list:",
        "  - a",
        "  -",
        "    k: v",
    ]


def test_show_command_renders_json_for_one_key(tmp_path: Path, scenario_a_text: str) -> None:
    """`show --key --format json` should print one section as JSON."""

    config_path = _write_config(tmp_path, scenario_a_text)

    result = CliRunner().invoke(
        app, ["show", str(config_path), "--key", "app", "--format", "json"]
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {"name": "MyApp", "version": "v1", "port": "8080"}


def test_show_command_renders_yaml(tmp_path: Path, scenario_a_text: str) -> None:
    """`show --format yaml` should print standard YAML for the whole tree."""

    config_path = _write_config(tmp_path, scenario_a_text)

    result = CliRunner().invoke(app, ["show", str(config_path), "-f", "yaml"])

    assert result.exit_code == 0
    assert yaml.safe_load(result.output) == {
        "app": {"name": "MyApp", "version": "v1", "port": "8080"},
        "list": ["a", "b"],
        "unknown": {"foo": "bar"},
    }


def test_show_command_reports_missing_key(tmp_path: Path) -> None:
    """`show --key` should fail clearly for absent keys."""

    config_path = _write_config(tmp_path, "a: 1\n")

    result = CliRunner().invoke(app, ["show", str(config_path), "--key", "b"])

    assert result.exit_code == 1
    assert "show failed: Key `b` not found" in result.output
    assert "Hint: Run `blockconf keys <path>` to list available keys." in result.output


def test_keys_command_lists_keys_in_document_order(tmp_path: Path) -> None:
    """`keys` should print one key per line in document order."""

    config_path = _write_config(tmp_path, "zeta: 1\nalpha:\n  x: 1\nmid:\n  - 1\n")

    result = CliRunner().invoke(app, ["keys", str(config_path)])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["zeta", "alpha", "mid"]


def test_verbose_flag_emits_config_events(tmp_path: Path) -> None:
    """`--verbose` should route config events to stderr."""

    config_path = _write_config(tmp_path, "a: 1\n")

    try:
        result = CliRunner().invoke(
            app, ["--verbose", "--log-level", "debug", "check", str(config_path)]
        )
    finally:
        logger.remove()

    assert result.exit_code == 0
    assert "[config] level=DEBUG stage=parse event=complete" in result.output
    assert "event=root_replaced keys=1" in result.output


def test_resolve_log_level_precedence(monkeypatch: MonkeyPatch) -> None:
    """Log level should resolve as CLI > env > default."""

    monkeypatch.delenv("BLOCKCONF_LOG_LEVEL", raising=False)
    assert _resolve_log_level(None) == "INFO"

    monkeypatch.setenv("BLOCKCONF_LOG_LEVEL", " warning ")
    assert _resolve_log_level(None) == "WARNING"
    assert _resolve_log_level("debug") == "DEBUG"
