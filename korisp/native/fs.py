from __future__ import annotations

from korisp.errors import KorispIOError
from korisp.native.module import NativeModule
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node


def read_to_string(location: Location, interpreter, arguments: Arguments) -> Node:
    path = arguments.unwrap_string(0)
    try:
        with open(path, encoding="utf-8") as handle:
            return Node.string(handle.read(), location)
    except (OSError, UnicodeDecodeError) as error:
        raise KorispIOError(error) from error


def write(location: Location, interpreter, arguments: Arguments) -> Node:
    path = arguments.unwrap_string(0)
    body = arguments.unwrap_string(1)
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(body)
    except OSError as error:
        raise KorispIOError(error) from error
    return Node.nil(location)


MODULE = NativeModule(
    "fs",
    functions=[
        ("read_to_string", read_to_string, "path:string"),
        ("write", write, "path:string body:string"),
    ],
)
