"""Node: the single tagged value shared by parsed syntax and runtime values.

Korisp is homoiconic. The parser produces Nodes, the evaluator consumes Nodes
and produces Nodes, and macros receive and return Nodes. Two kinds only ever
appear in evaluator output: CALLABLE (a function or macro object) and MODULE
(an Environment used as a namespace).
"""

from __future__ import annotations

import math
import struct
from enum import Enum
from typing import Any, Iterable

from korisp.types.location import Location


class NodeKind(Enum):
    MAIN = "main"
    TABLE = "table"
    STRUCT = "struct"
    PARRAY = "parray"
    BARRAY = "barray"
    PTUPLE = "ptuple"
    BTUPLE = "btuple"
    NUMBER = "number"
    STRING = "string"
    BUFFER = "buffer"
    SYMBOL = "symbol"
    KEYWORD = "keyword"
    TRUE = "true"
    FALSE = "false"
    NIL = "nil"
    # Internal: synthesized by the evaluator only
    CALLABLE = "callable"
    MODULE = "module"


SEQUENCE_KINDS = frozenset(
    {NodeKind.MAIN, NodeKind.PARRAY, NodeKind.BARRAY, NodeKind.PTUPLE, NodeKind.BTUPLE}
)
LIST_KINDS = frozenset({NodeKind.PARRAY, NodeKind.BARRAY, NodeKind.PTUPLE, NodeKind.BTUPLE})
MAP_KINDS = frozenset({NodeKind.TABLE, NodeKind.STRUCT})
TEXT_KINDS = frozenset({NodeKind.STRING, NodeKind.BUFFER})
MUTABLE_KINDS = frozenset({NodeKind.TABLE, NodeKind.PARRAY, NodeKind.BARRAY, NodeKind.BUFFER})

_BRACKETS = {
    NodeKind.PTUPLE: ("(", ")"),
    NodeKind.BTUPLE: ("[", "]"),
    NodeKind.PARRAY: ("@(", ")"),
    NodeKind.BARRAY: ("@[", "]"),
    NodeKind.STRUCT: ("{", "}"),
    NodeKind.TABLE: ("@{", "}"),
}


def number_bits(value: float) -> int:
    """Exact IEEE-754 bit pattern of `value`."""
    return struct.unpack(">Q", struct.pack(">d", value))[0]


def format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == int(value):
        text = str(int(value))
        # int() drops the sign of negative zero
        return "-0" if value == 0 and math.copysign(1.0, value) < 0 else text
    return repr(value)


class Node:
    """A located, tagged syntax/value node."""

    __slots__ = ("location", "kind", "data")

    def __init__(self, kind: NodeKind, data: Any = None, location: Location | None = None):
        self.kind: NodeKind = kind
        self.data: Any = data
        self.location: Location = location if location is not None else Location.unknown()

    # --- Constructors ---
    @classmethod
    def number(cls, value: float, location: Location | None = None) -> Node:
        return cls(NodeKind.NUMBER, float(value), location)

    @classmethod
    def string(cls, value: str, location: Location | None = None) -> Node:
        return cls(NodeKind.STRING, value, location)

    @classmethod
    def buffer(cls, value: str, location: Location | None = None) -> Node:
        return cls(NodeKind.BUFFER, value, location)

    @classmethod
    def symbol(cls, name: str, location: Location | None = None) -> Node:
        return cls(NodeKind.SYMBOL, name, location)

    @classmethod
    def keyword(cls, name: str, location: Location | None = None) -> Node:
        return cls(NodeKind.KEYWORD, name, location)

    @classmethod
    def boolean(cls, value: bool, location: Location | None = None) -> Node:
        return cls(NodeKind.TRUE if value else NodeKind.FALSE, None, location)

    @classmethod
    def nil(cls, location: Location | None = None) -> Node:
        return cls(NodeKind.NIL, None, location)

    @classmethod
    def ptuple(cls, nodes: Iterable[Node], location: Location | None = None) -> Node:
        return cls(NodeKind.PTUPLE, list(nodes), location)

    @classmethod
    def btuple(cls, nodes: Iterable[Node], location: Location | None = None) -> Node:
        return cls(NodeKind.BTUPLE, list(nodes), location)

    @classmethod
    def callable(cls, callable_: Any, location: Location | None = None) -> Node:
        return cls(NodeKind.CALLABLE, callable_, location)

    @classmethod
    def module(cls, environment: Any, location: Location | None = None) -> Node:
        return cls(NodeKind.MODULE, environment, location)

    # --- Predicates ---
    def is_nil(self) -> bool:
        return self.kind is NodeKind.NIL

    def is_truthy(self) -> bool:
        return self.kind not in (NodeKind.NIL, NodeKind.FALSE)

    def is_falsy(self) -> bool:
        return not self.is_truthy()

    def is_symbol(self, name: str | None = None) -> bool:
        return self.kind is NodeKind.SYMBOL and (name is None or self.data == name)

    def is_list(self) -> bool:
        return self.kind in LIST_KINDS

    def is_callable(self) -> bool:
        return self.kind is NodeKind.CALLABLE

    def is_form(self, head: str) -> bool:
        """True for a call expression `(head ...)` whose head is the given symbol."""
        return (
            self.kind is NodeKind.PTUPLE
            and bool(self.data)
            and self.data[0].is_symbol(head)
        )

    def text(self) -> str:
        """Raw text for strings and buffers, display form otherwise."""
        if self.kind in TEXT_KINDS:
            return self.data
        return str(self)

    def clone(self) -> Node:
        """Copy mutable containers; callables and modules stay shared."""
        if self.kind in SEQUENCE_KINDS:
            return Node(self.kind, [n.clone() for n in self.data], self.location)
        if self.kind in MAP_KINDS:
            return Node(
                self.kind, {k.clone(): v.clone() for k, v in self.data.items()}, self.location
            )
        return Node(self.kind, self.data, self.location)

    # --- Equality / hashing: by variant and contents, never by location ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        if self.kind is not other.kind:
            return False
        match self.kind:
            case NodeKind.NUMBER:
                return number_bits(self.data) == number_bits(other.data)
            case NodeKind.CALLABLE | NodeKind.MODULE:
                return self.data is other.data
            case _:
                return self.data == other.data

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self) -> int:
        kind = self.kind
        if kind is NodeKind.NUMBER:
            payload: Any = number_bits(self.data)
        elif kind in SEQUENCE_KINDS:
            payload = tuple(self.data)
        elif kind in MAP_KINDS:
            payload = frozenset(self.data.items())
        elif kind in (NodeKind.CALLABLE, NodeKind.MODULE):
            payload = id(self.data)
        else:
            payload = self.data
        return hash((kind, payload))

    # --- Display ---
    def __str__(self) -> str:
        match self.kind:
            case NodeKind.MAIN:
                return f"<main {len(self.data)}>"
            case NodeKind.NUMBER:
                return format_number(self.data)
            case NodeKind.STRING:
                return f'"{self.data}"'
            case NodeKind.BUFFER:
                return f'@"{self.data}"'
            case NodeKind.SYMBOL:
                return self.data
            case NodeKind.KEYWORD:
                return f":{self.data}"
            case NodeKind.TRUE:
                return "true"
            case NodeKind.FALSE:
                return "false"
            case NodeKind.NIL:
                return "nil"
            case NodeKind.CALLABLE:
                return str(self.data)
            case NodeKind.MODULE:
                return f"<module {self.data.name or '?'}>"
            case NodeKind.TABLE | NodeKind.STRUCT:
                opening, closing = _BRACKETS[self.kind]
                inner = " ".join(f"{k} {v}" for k, v in self.data.items())
                return f"{opening}{inner}{closing}"
            case _:
                opening, closing = _BRACKETS[self.kind]
                return f"{opening}{' '.join(str(n) for n in self.data)}{closing}"

    def __repr__(self) -> str:
        return f"Node({self.kind.name}, {self})"
