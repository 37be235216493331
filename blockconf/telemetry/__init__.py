"""Telemetry helpers.

This package emits deterministic load and dispatch events through loguru.
"""

from .logger import ConfigEventLogger, configure_cli_logging

__all__ = ["ConfigEventLogger", "configure_cli_logging"]
