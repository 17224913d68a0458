"""The `list` module. Results are always new BTuples; inputs are never
modified."""

from __future__ import annotations

from korisp.native.module import NativeModule
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node


def head(location: Location, interpreter, arguments: Arguments) -> Node:
    items = arguments.unwrap_list(0)
    return items[0] if items else Node.nil(location)


def tail(location: Location, interpreter, arguments: Arguments) -> Node:
    return Node.btuple(arguments.unwrap_list(0)[1:], location)


def length(location: Location, interpreter, arguments: Arguments) -> Node:
    return Node.number(len(arguments.unwrap_list(0)), location)


def push(location: Location, interpreter, arguments: Arguments) -> Node:
    return Node.btuple(arguments.unwrap_list(0) + arguments.unwrap_from(1), location)


def map_(location: Location, interpreter, arguments: Arguments) -> Node:
    function = arguments.unwrap_function(0)
    return Node.btuple(
        [interpreter.apply(function, location, [item]) for item in arguments.unwrap_list(1)],
        location,
    )


def filter_(location: Location, interpreter, arguments: Arguments) -> Node:
    function = arguments.unwrap_function(0)
    kept = [
        item
        for item in arguments.unwrap_list(1)
        if interpreter.apply(function, location, [item]).is_truthy()
    ]
    return Node.btuple(kept, location)


def reduce_(location: Location, interpreter, arguments: Arguments) -> Node:
    function = arguments.unwrap_function(0)
    accumulator = arguments.unwrap(1)
    for item in arguments.unwrap_list(2):
        accumulator = interpreter.apply(function, location, [accumulator, item])
    return accumulator


MODULE = NativeModule(
    "list",
    functions=[
        ("head", head, "l:list"),
        ("tail", tail, "l:list"),
        ("len", length, "l:list"),
        ("push", push, "l:list & values"),
        ("map", map_, "f:function l:list"),
        ("filter", filter_, "f:function l:list"),
        ("reduce", reduce_, "f:function init l:list"),
    ],
)
