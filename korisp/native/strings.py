from __future__ import annotations

from korisp.errors import InvalidNodeArgument
from korisp.native.module import NativeModule
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node, TEXT_KINDS
from korisp.types.parameters import ParameterType


def _texts(nodes: list[Node], skip_nil: bool = False) -> list[str]:
    texts = []
    for node in nodes:
        if skip_nil and node.is_nil():
            continue
        if node.kind not in TEXT_KINDS:
            raise InvalidNodeArgument((ParameterType.STRING,), node)
        texts.append(node.data)
    return texts


def length(location: Location, interpreter, arguments: Arguments) -> Node:
    return Node.number(len(arguments.unwrap_string(0)), location)


def join(location: Location, interpreter, arguments: Arguments) -> Node:
    separator = arguments.unwrap_string(0)
    return Node.string(separator.join(_texts(arguments.unwrap_list(1))), location)


def join_not_nil(location: Location, interpreter, arguments: Arguments) -> Node:
    """Like join, but nil items are skipped; nil if nothing is left."""
    separator = arguments.unwrap_string(0)
    texts = _texts(arguments.unwrap_list(1), skip_nil=True)
    if not texts:
        return Node.nil(location)
    return Node.string(separator.join(texts), location)


def trim(location: Location, interpreter, arguments: Arguments) -> Node:
    return Node.string(arguments.unwrap_string(0).strip(), location)


def split(location: Location, interpreter, arguments: Arguments) -> Node:
    separator = arguments.unwrap_string(0)
    text = arguments.unwrap_string(1)
    # str.split rejects an empty separator; split into characters instead
    parts = text.split(separator) if separator else ["", *text, ""]
    return Node.btuple([Node.string(p, location) for p in parts], location)


MODULE = NativeModule(
    "string",
    functions=[
        ("len", length, "s:string"),
        ("join", join, "separator:string l:list"),
        ("join-not-nil", join_not_nil, "separator:string l:list"),
        ("trim", trim, "s:string"),
        ("split", split, "separator:string string:string"),
    ],
)
