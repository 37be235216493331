"""Shared pytest fixtures for the full blockconf test suite."""

from __future__ import annotations

from typing import Iterator

from loguru import logger
import pytest

from blockconf.registry import ConfigRegistry


SCENARIO_A_TEXT = (
    "app:\n"
    '  name: "MyApp"\n'
    "  version: v1\n"
    "  port: 8080\n"
    "list:\n"
    "  - a\n"
    "  - b\n"
    "unknown:\n"
    "  foo: bar\n"
)


@pytest.fixture
def registry() -> ConfigRegistry:
    """Provide an isolated registry so tests never share callbacks or state."""

    return ConfigRegistry()


@pytest.fixture
def scenario_a_text() -> str:
    """Provide the canonical app/list/unknown document."""

    return SCENARIO_A_TEXT


@pytest.fixture
def log_lines() -> Iterator[list[str]]:
    """Capture blockconf log lines emitted while the test runs."""

    captured: list[str] = []
    logger.enable("blockconf")
    handler_id = logger.add(
        lambda message: captured.append(str(message).rstrip("\n")),
        format="{message}",
        level="DEBUG",
    )
    yield captured
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Restore the library's disabled logging state after each test."""

    yield
    logger.remove()
    logger.disable("blockconf")
