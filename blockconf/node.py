"""Config tree data model.

Responsibilities:
- Represent parsed config as an immutable tagged tree of scalars, mappings,
  and sequences.
- Provide the sequence iteration and mapping decode contracts used by
  config consumers.

Key types:
- `NodeKind`: discriminator for the three node shapes.
- `Node`: one immutable tree value.
- `Unmarshaler`: interface implemented by objects populated via `Node.decode`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from .errors import DecodeError, NotAListError, NotUnmarshalerError


class NodeKind(str, Enum):
    """Shape of a config node."""

    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


_EMPTY_CHILDREN: Mapping[str, "Node"] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Node:
    """Immutable config tree value.

    Attributes:
        kind: Node shape.
        value: Scalar text; empty for mappings and sequences.
        children: Read-only `key -> Node` view in document order (mappings only).
        items: Ordered child nodes (sequences only).
    """

    kind: NodeKind
    value: str = ""
    children: Mapping[str, Node] = field(default_factory=lambda: _EMPTY_CHILDREN)
    items: tuple[Node, ...] = ()

    # Children are held in a mappingproxy, which cannot be hashed.
    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def scalar(cls, value: str) -> Node:
        """Build a scalar node."""

        return cls(kind=NodeKind.SCALAR, value=value)

    @classmethod
    def mapping(cls, children: Mapping[str, Node] | None = None) -> Node:
        """Build a mapping node from a snapshot of `children`."""

        return cls(kind=NodeKind.MAPPING, children=MappingProxyType(dict(children or {})))

    @classmethod
    def sequence(cls, items: list[Node] | tuple[Node, ...] = ()) -> Node:
        """Build a sequence node."""

        return cls(kind=NodeKind.SEQUENCE, items=tuple(items))

    @property
    def is_scalar(self) -> bool:
        return self.kind is NodeKind.SCALAR

    @property
    def is_mapping(self) -> bool:
        return self.kind is NodeKind.MAPPING

    @property
    def is_sequence(self) -> bool:
        return self.kind is NodeKind.SEQUENCE

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        if self.kind is NodeKind.MAPPING:
            return len(self.children)
        if self.kind is NodeKind.SEQUENCE:
            return len(self.items)
        return 0

    def __contains__(self, key: object) -> bool:
        return self.kind is NodeKind.MAPPING and key in self.children

    def get(self, key: str) -> Node | None:
        """Return the child node for `key`, or `None` when absent or not a mapping."""

        if self.kind is not NodeKind.MAPPING:
            return None
        return self.children.get(key)

    def keys(self) -> list[str]:
        """Return mapping keys in document order (empty for other kinds)."""

        return list(self.children.keys())

    def iter(self, visit: Callable[[int, Node], None]) -> None:
        """Call `visit(index, item)` for each sequence item in order.

        An exception raised by `visit` stops iteration and propagates unchanged.

        Raises:
            NotAListError: If this node is not a sequence.
        """

        if self.kind is not NodeKind.SEQUENCE:
            raise NotAListError()
        for index, item in enumerate(self.items):
            visit(index, item)

    def decode(self, target: object) -> None:
        """Populate `target` with this mapping's children, one key at a time.

        Raises:
            NotUnmarshalerError: If `target` is not an `Unmarshaler`.
            DecodeError: If this node is not a mapping.
        """

        if not isinstance(target, Unmarshaler):
            raise NotUnmarshalerError(target_type=type(target).__name__)
        if self.kind is not NodeKind.MAPPING:
            raise DecodeError(detail="cannot decode non-map node to struct")
        for key, child in self.children.items():
            target.unmarshal_node(key, child)

    def walk(self) -> Iterator[tuple[tuple[str, ...], Node]]:
        """Yield `(path, node)` pairs depth-first, starting with this node.

        Sequence positions appear in the path as their decimal index.
        """

        stack: list[tuple[tuple[str, ...], Node]] = [((), self)]
        while stack:
            path, node = stack.pop()
            yield path, node
            if node.kind is NodeKind.MAPPING:
                pairs = [(path + (key,), child) for key, child in node.children.items()]
            elif node.kind is NodeKind.SEQUENCE:
                pairs = [(path + (str(i),), item) for i, item in enumerate(node.items)]
            else:
                continue
            stack.extend(reversed(pairs))

    def to_python(self) -> Any:
        """Convert the subtree into plain `str`, `dict`, and `list` values."""

        if self.kind is NodeKind.MAPPING:
            return {key: child.to_python() for key, child in self.children.items()}
        if self.kind is NodeKind.SEQUENCE:
            return [item.to_python() for item in self.items]
        return self.value


class Unmarshaler:
    """Interface for objects that accept config fields one key at a time."""

    def unmarshal_node(self, key: str, value: Node) -> None:
        """Apply one config field to this object, raising on invalid values."""

        raise NotImplementedError
