"""Structured config event logging.

Responsibilities:
- Emit concise, deterministic parse/load/dispatch events through `loguru`.
- Keep config values out of log lines; only keys, counts, and error types are logged.

The package disables its loguru records on import; applications opt in with
`logger.enable("blockconf")` or `configure_cli_logging`.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def configure_cli_logging(sink: TextIO | None = None, level: str = "INFO") -> None:
    """Route blockconf events to `sink` with message-only formatting."""

    logger.remove()
    logger.add(sink or sys.stderr, format="{message}", level=level.upper(), colorize=False)
    logger.enable("blockconf")


class ConfigEventLogger:
    """Emit deterministic events for config parsing and dispatch activity."""

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured config log line."""

        line = f"[config] level={level} stage={stage} event={event}{_format_context(context)}"
        logger.log(level, line)

    def log_parse_complete(self, source: str, key_count: int, root_kind: str) -> None:
        """Emit a parse-complete event with the root shape."""

        self._emit("DEBUG", "complete", "parse", source=source, keys=key_count, root=root_kind)

    def log_parse_failure(self, source: str, line: int, error_type: str) -> None:
        """Emit a parse-failure event."""

        self._emit("ERROR", "failure", "parse", source=source, line=line, error_type=error_type)

    def log_load_failure(self, source: str, error_type: str) -> None:
        """Emit a load-failure event for read or root-shape problems."""

        self._emit("ERROR", "failure", "load", source=source, error_type=error_type)

    def log_root_replaced(self, source: str, key_count: int) -> None:
        """Emit an event when a new tree becomes the current config."""

        self._emit("INFO", "root_replaced", "load", source=source, keys=key_count)

    def log_callback(self, key: str, calls: int, flattened: bool) -> None:
        """Emit one event per registered key that received callbacks."""

        self._emit("DEBUG", "dispatched", "callback", key=key, calls=calls, flattened=flattened)

    def log_unknown_key(self, key: str, handled: bool) -> None:
        """Emit one event per top-level key without a registered callback."""

        self._emit("DEBUG", "unknown_key", "dispatch", key=key, handled=handled)

    def log_dispatch_complete(self, matched: int, unknown: int) -> None:
        """Emit a dispatch summary event."""

        self._emit("INFO", "complete", "dispatch", matched=matched, unknown=unknown)

    def log_dispatch_failure(self, key: str, error_type: str) -> None:
        """Emit a dispatch-failure event without the callback's message payload."""

        self._emit("ERROR", "failure", "dispatch", key=key, error_type=error_type)
