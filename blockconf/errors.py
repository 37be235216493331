"""Domain exceptions for config parsing, decoding, and dispatch diagnostics."""

from __future__ import annotations


class ConfigError(RuntimeError):
    """Base class for every failure raised by the config subsystem."""

    def __init__(self, *, detail: str, hint: str | None = None) -> None:
        """Initialize an error with a user-facing detail and optional hint."""

        super().__init__(detail)
        self.detail = detail
        self.hint = hint


class ConfigReadError(ConfigError):
    """Raised when a config file cannot be read from disk."""

    def __init__(self, *, path: str, reason: str) -> None:
        """Initialize a read failure for one config path."""

        super().__init__(
            detail=f"Failed to read config file `{path}`: {reason}",
            hint="Verify the file exists and is readable.",
        )
        self.path = path
        self.reason = reason


class ConfigParseError(ConfigError):
    """Raised when config text violates the block grammar.

    Attributes:
        line: 1-based line number of the offending line.
        reason: Short machine-stable cause, e.g. `mixed mapping and sequence`.
        source: Label of the parsed input (file path or `<bytes>`).
    """

    def __init__(self, *, line: int, reason: str, source: str = "<bytes>") -> None:
        """Initialize a positional parse error."""

        super().__init__(detail=f"{source} line {line}: {reason}")
        self.line = line
        self.reason = reason
        self.source = source


class RootShapeError(ConfigError):
    """Raised when a config root consumed for dispatch is not a mapping."""

    def __init__(self) -> None:
        super().__init__(
            detail="config root must be a mapping",
            hint="Start the document with `key: value` lines, not `- item` lines.",
        )


class ConfigNotLoadedError(ConfigError):
    """Raised when manual dispatch runs before any config was loaded."""

    def __init__(self) -> None:
        super().__init__(
            detail="config not loaded",
            hint="Call `load()` or `parse_config()` before `callback()`.",
        )


class DecodeError(ConfigError):
    """Raised when a non-mapping node is decoded into a target object."""


class NotUnmarshalerError(ConfigError):
    """Raised when a decode target does not implement `Unmarshaler`."""

    def __init__(self, *, target_type: str) -> None:
        super().__init__(
            detail=(
                f"type {target_type} does not implement "
                "Unmarshaler.unmarshal_node(key, value)"
            ),
        )
        self.target_type = target_type


class NotAListError(ConfigError):
    """Raised when a non-sequence node is iterated."""

    def __init__(self) -> None:
        super().__init__(detail="node is not a list")


class DispatchError(ConfigError):
    """Raised when a registered or unknown-key callback fails.

    The original exception is chained as `__cause__`.
    """

    def __init__(
        self,
        *,
        key: str,
        child_key: str | None = None,
        unknown: bool = False,
        reason: str = "",
    ) -> None:
        """Initialize a dispatch failure for one top-level (and nested) key."""

        path = key if child_key is None else f"{key}.{child_key}"
        label = "unknown config key" if unknown else "config key"
        detail = f"failed to handle {label} '{path}'"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail=detail)
        self.key = key
        self.child_key = child_key
        self.unknown = unknown


class ConversionError(ConfigError, ValueError):
    """Raised when a scalar value cannot be converted to a typed value."""

    def __init__(self, *, field_name: str, expected: str, value: str) -> None:
        super().__init__(
            detail=f"`{field_name}` must be {expected}, got `{value}`.",
        )
        self.field_name = field_name
        self.expected = expected
        self.value = value
