from __future__ import annotations

import operator

from korisp.errors import KorispInvalidOperation
from korisp.native.module import NativeModule
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node, NodeKind, TEXT_KINDS


def negate(location: Location, interpreter, arguments: Arguments) -> Node:
    return Node.boolean(arguments.unwrap(0).is_falsy(), location)


def _orderable(lhs: Node, rhs: Node) -> bool:
    if lhs.kind is NodeKind.NUMBER:
        return rhs.kind is NodeKind.NUMBER
    return lhs.kind in TEXT_KINDS and rhs.kind in TEXT_KINDS


def _ordering(name: str, op):
    """(op a b c ...) holds when op holds for every adjacent pair."""

    def impl(location: Location, interpreter, arguments: Arguments) -> Node:
        nodes = list(arguments)
        for lhs, rhs in zip(nodes, nodes[1:]):
            if not _orderable(lhs, rhs):
                raise KorispInvalidOperation(f"compare ({name})", lhs, rhs)
            if not op(lhs.data, rhs.data):
                return Node.boolean(False, location)
        return Node.boolean(True, location)

    return impl


def equal(location: Location, interpreter, arguments: Arguments) -> Node:
    nodes = list(arguments)
    return Node.boolean(all(a == b for a, b in zip(nodes, nodes[1:])), location)


def not_equal(location: Location, interpreter, arguments: Arguments) -> Node:
    nodes = list(arguments)
    return Node.boolean(all(a != b for a, b in zip(nodes, nodes[1:])), location)


def or_(location: Location, interpreter, arguments: Arguments) -> Node:
    """First truthy operand, else the last one."""
    for node in arguments:
        if node.is_truthy():
            return node
    return arguments.unwrap(len(arguments) - 1)


def and_(location: Location, interpreter, arguments: Arguments) -> Node:
    """First falsy operand, else the last one."""
    for node in arguments:
        if node.is_falsy():
            return node
    return arguments.unwrap(len(arguments) - 1)


def coalesce(location: Location, interpreter, arguments: Arguments) -> Node:
    for node in arguments:
        if not node.is_nil():
            return node
    return Node.nil(location)


MODULE = NativeModule(
    "boolean",
    functions=[
        ("!", negate, "b"),
        (">", _ordering(">", operator.gt), "& b"),
        (">=", _ordering(">=", operator.ge), "& b"),
        ("<", _ordering("<", operator.lt), "& b"),
        ("<=", _ordering("<=", operator.le), "& b"),
        ("==", equal, "& b"),
        ("!=", not_equal, "& b"),
        ("or", or_, "& v"),
        ("and", and_, "& v"),
        ("??", coalesce, "& v"),
    ],
    core=True,
)
