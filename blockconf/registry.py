"""Key-based config registry and dispatcher.

Responsibilities:
- Hold `key -> callback` registrations plus one unknown-key fallback.
- Parse config input, keep the latest successful tree as current state,
  and route its top-level sections to registered callbacks.

Dispatch rules:
- A registered key whose value is a mapping is flattened: the callback runs
  once per child as `callback(child_key, child_node)`.
- A registered key whose value is a scalar or sequence runs the callback once
  as `callback(key, node)`.
- Every top-level key without a registration goes to the unknown-key callback
  once, unflattened.

Key types:
- `ConfigRegistry`: owned registry/dispatcher context.
- `default_registry`: shared instance behind the module-level helpers.
"""

from __future__ import annotations

from pathlib import Path
import threading
from typing import Callable

from .errors import (
    ConfigNotLoadedError,
    ConfigParseError,
    ConfigReadError,
    DispatchError,
    RootShapeError,
)
from .node import Node
from .parser import parse
from .telemetry.logger import ConfigEventLogger


CallbackFn = Callable[[str, Node], None]


class ConfigRegistry:
    """Registry of config callbacks together with the current config tree.

    Registration and dispatch may run from different threads. Callbacks always
    execute outside the internal locks.
    """

    def __init__(self, event_logger: ConfigEventLogger | None = None) -> None:
        """Initialize an empty registry with no loaded config."""

        self._callbacks: dict[str, CallbackFn] = {}
        self._unknown_callback: CallbackFn | None = None
        self._registry_lock = threading.Lock()
        self._root: Node | None = None
        self._root_lock = threading.Lock()
        self._events = event_logger or ConfigEventLogger()

    def register(self, key: str, callback: CallbackFn) -> None:
        """Register `callback` for top-level `key`, replacing any previous one."""

        with self._registry_lock:
            self._callbacks[key] = callback

    def register_unknown(self, callback: CallbackFn) -> None:
        """Register the fallback for top-level keys without a callback."""

        with self._registry_lock:
            self._unknown_callback = callback

    def registered_keys(self) -> list[str]:
        """Return registered keys in registration order."""

        with self._registry_lock:
            return list(self._callbacks.keys())

    @property
    def current_root(self) -> Node | None:
        """Most recent successfully parsed config tree, if any."""

        with self._root_lock:
            return self._root

    def load(self, path: str | Path) -> None:
        """Read, parse, store, and dispatch a config file.

        Raises:
            ConfigReadError: If the file cannot be read.
            ConfigParseError: If the content is malformed.
            RootShapeError: If the document root is not a mapping.
            DispatchError: If a callback fails.
        """

        config_path = Path(path)
        try:
            data = config_path.read_bytes()
        except OSError as exc:
            self._events.log_load_failure(str(config_path), type(exc).__name__)
            raise ConfigReadError(
                path=str(config_path), reason=exc.strerror or str(exc)
            ) from exc
        self.parse_config(data, source=str(config_path))

    def parse_config(self, data: bytes | str, source: str = "<bytes>") -> None:
        """Parse config content, make it current, then dispatch it.

        A parse or root-shape failure leaves the previously stored tree in place.
        A callback failure aborts the remaining dispatch but keeps the new tree.
        """

        try:
            root = parse(data, source)
        except ConfigParseError as exc:
            self._events.log_parse_failure(source, exc.line, type(exc).__name__)
            raise
        self._events.log_parse_complete(source, len(root), root.kind.value)

        if not root.is_mapping:
            self._events.log_load_failure(source, RootShapeError.__name__)
            raise RootShapeError()

        with self._root_lock:
            self._root = root
        self._events.log_root_replaced(source, len(root))

        self._dispatch(root)

    def callback(self, key: str, callback: CallbackFn) -> None:
        """Run `callback` for `key` against the current tree.

        Applies the same flattening rule as load-time dispatch. Missing keys are
        a no-op; the unknown-key callback is never involved.

        Raises:
            ConfigNotLoadedError: If no config has been loaded yet.
            DispatchError: If the callback fails.
        """

        root = self.current_root
        if root is None:
            raise ConfigNotLoadedError()
        if not root.is_mapping:
            raise RootShapeError()

        child = root.get(key)
        if child is None:
            return
        self._invoke(key, child, callback)

    def _dispatch(self, root: Node) -> None:
        """Route top-level sections of `root` to registered callbacks."""

        with self._registry_lock:
            registrations = list(self._callbacks.items())
            unknown_callback = self._unknown_callback

        registered = {key for key, _ in registrations}
        matched = 0
        for key, callback in registrations:
            child = root.get(key)
            if child is None:
                continue
            self._invoke(key, child, callback)
            matched += 1

        unknown = 0
        for key, child in root.children.items():
            if key in registered:
                continue
            unknown += 1
            self._events.log_unknown_key(key, handled=unknown_callback is not None)
            if unknown_callback is None:
                continue
            try:
                unknown_callback(key, child)
            except Exception as exc:
                self._events.log_dispatch_failure(key, type(exc).__name__)
                raise DispatchError(key=key, unknown=True, reason=str(exc)) from exc

        self._events.log_dispatch_complete(matched=matched, unknown=unknown)

    def _invoke(self, key: str, child: Node, callback: CallbackFn) -> None:
        """Apply the flattening rule for one top-level key."""

        if child.is_mapping:
            for child_key, grandchild in child.children.items():
                try:
                    callback(child_key, grandchild)
                except Exception as exc:
                    self._events.log_dispatch_failure(f"{key}.{child_key}", type(exc).__name__)
                    raise DispatchError(
                        key=key, child_key=child_key, reason=str(exc)
                    ) from exc
            self._events.log_callback(key, calls=len(child), flattened=True)
            return

        try:
            callback(key, child)
        except Exception as exc:
            self._events.log_dispatch_failure(key, type(exc).__name__)
            raise DispatchError(key=key, reason=str(exc)) from exc
        self._events.log_callback(key, calls=1, flattened=False)


default_registry = ConfigRegistry()


def register(key: str, callback: CallbackFn) -> None:
    """Register a callback on the shared default registry."""

    default_registry.register(key, callback)


def register_unknown(callback: CallbackFn) -> None:
    """Register the unknown-key callback on the shared default registry."""

    default_registry.register_unknown(callback)


def load(path: str | Path) -> None:
    """Load a config file into the shared default registry."""

    default_registry.load(path)


def parse_config(data: bytes | str, source: str = "<bytes>") -> None:
    """Parse and dispatch config content on the shared default registry."""

    default_registry.parse_config(data, source)


def callback(key: str, callback: CallbackFn) -> None:
    """Re-dispatch one key of the shared default registry's current tree."""

    default_registry.callback(key, callback)


def current_root() -> Node | None:
    """Return the shared default registry's current tree."""

    return default_registry.current_root
