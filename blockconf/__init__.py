"""Top-level package for blockconf.

This package parses indentation-based config files into an immutable `Node`
tree and routes top-level sections to registered callbacks. The main entry
point is `ConfigRegistry`; module-level helpers operate on a shared
`default_registry`.
"""

from loguru import logger

from .errors import (
    ConfigError,
    ConfigNotLoadedError,
    ConfigParseError,
    ConfigReadError,
    ConversionError,
    DecodeError,
    DispatchError,
    NotAListError,
    NotUnmarshalerError,
    RootShapeError,
)
from .node import Node, NodeKind, Unmarshaler
from .parser import parse
from .registry import (
    CallbackFn,
    ConfigRegistry,
    callback,
    current_root,
    default_registry,
    load,
    parse_config,
    register,
    register_unknown,
)

logger.disable("blockconf")

__all__ = [
    "CallbackFn",
    "ConfigError",
    "ConfigNotLoadedError",
    "ConfigParseError",
    "ConfigReadError",
    "ConfigRegistry",
    "ConversionError",
    "DecodeError",
    "DispatchError",
    "Node",
    "NodeKind",
    "NotAListError",
    "NotUnmarshalerError",
    "RootShapeError",
    "Unmarshaler",
    "__version__",
    "callback",
    "current_root",
    "default_registry",
    "load",
    "parse",
    "parse_config",
    "register",
    "register_unknown",
]

__version__ = "0.1.0"
