"""Typed readers for scalar config values.

Callbacks receive every value as text. These helpers turn a scalar `Node`
(or plain string) into `int`, `float`, `bool`, `timedelta`, or `list[str]`
values with actionable error messages, plus `*_or_default` variants for
fields that fall back silently.
"""

from __future__ import annotations

from datetime import timedelta
import re
from typing import Callable, TypeVar

from .errors import ConversionError
from .node import Node


_TRUE_BOOLEAN_TOKENS = frozenset({"1", "t", "true", "yes", "on"})
_FALSE_BOOLEAN_TOKENS = frozenset({"0", "f", "false", "no", "off"})

_DURATION_UNITS_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")
_PLAIN_NUMBER = re.compile(r"[+-]?(\d+(?:\.\d*)?|\.\d+)")

_T = TypeVar("_T")


def normalize_optional_string(value: object) -> str | None:
    """Normalize an optional value to a stripped non-empty string.

    Returns:
        Stripped string value, or `None` when the value is empty after trimming.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    return text


def to_text(value: Node | str | None) -> str:
    """Return the stripped scalar text of a node or string (`""` for `None`)."""

    if value is None:
        return ""
    if isinstance(value, Node):
        return value.value.strip()
    return str(value).strip()


def to_int(value: Node | str | None, field_name: str = "value") -> int:
    """Parse a base-10 integer; blank text reads as `0`.

    Raises:
        ConversionError: If the text is not an integer.
    """

    text = to_text(value)
    if not text:
        return 0
    try:
        return int(text, 10)
    except ValueError as exc:
        raise ConversionError(field_name=field_name, expected="an integer", value=text) from exc


def to_float(value: Node | str | None, field_name: str = "value") -> float:
    """Parse a float; blank text reads as `0.0`."""

    text = to_text(value)
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError as exc:
        raise ConversionError(field_name=field_name, expected="a number", value=text) from exc


def to_bool(value: Node | str | None, field_name: str = "value") -> bool:
    """Parse a boolean token (`true`/`false`, `1`/`0`, `yes`/`no`, `on`/`off`)."""

    token = to_text(value).lower()
    if token in _TRUE_BOOLEAN_TOKENS:
        return True
    if token in _FALSE_BOOLEAN_TOKENS:
        return False
    raise ConversionError(
        field_name=field_name,
        expected="a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)",
        value=token,
    )


def to_duration(value: Node | str | None, field_name: str = "value") -> timedelta:
    """Parse a duration such as `300ms`, `1h30m`, or `-1.5h`.

    A bare number is read as seconds; `0` needs no unit.
    """

    text = to_text(value)
    if _PLAIN_NUMBER.fullmatch(text):
        return timedelta(seconds=float(text))

    sign = 1.0
    body = text
    if body[:1] in {"+", "-"}:
        sign = -1.0 if body[0] == "-" else 1.0
        body = body[1:]

    total_seconds = 0.0
    position = 0
    for match in _DURATION_PART.finditer(body):
        if match.start() != position:
            break
        total_seconds += float(match.group(1)) * _DURATION_UNITS_SECONDS[match.group(2)]
        position = match.end()
    if not body or position != len(body):
        raise ConversionError(
            field_name=field_name,
            expected="a duration like `30s`, `5m`, or `1h30m`",
            value=text,
        )
    return timedelta(seconds=sign * total_seconds)


def to_string_list(value: Node, field_name: str = "value") -> list[str]:
    """Read a sequence of scalars as a list of strings.

    Raises:
        ConversionError: If `value` is not a sequence or holds nested collections.
    """

    if not value.is_sequence:
        raise ConversionError(field_name=field_name, expected="a list", value=value.kind.value)
    texts: list[str] = []

    def _collect(index: int, item: Node) -> None:
        if not item.is_scalar:
            raise ConversionError(
                field_name=f"{field_name}[{index}]",
                expected="a scalar",
                value=item.kind.value,
            )
        texts.append(item.value)

    value.iter(_collect)
    return texts


def _or_default(
    reader: Callable[[Node | str | None], _T], value: Node | str | None, default: _T
) -> _T:
    """Call `reader` and return `default` when conversion fails."""

    try:
        return reader(value)
    except ConversionError:
        return default


def int_or_default(value: Node | str | None, default: int) -> int:
    """Parse an integer, returning `default` on invalid input."""

    return _or_default(to_int, value, default)


def float_or_default(value: Node | str | None, default: float) -> float:
    """Parse a float, returning `default` on invalid input."""

    return _or_default(to_float, value, default)


def bool_or_default(value: Node | str | None, default: bool) -> bool:
    """Parse a boolean, returning `default` on invalid or blank input."""

    return _or_default(to_bool, value, default)


def duration_or_default(value: Node | str | None, default: timedelta) -> timedelta:
    """Parse a duration, returning `default` on invalid or blank input."""

    return _or_default(to_duration, value, default)
