from __future__ import annotations

from korisp.errors import KorispIOError
from korisp.native.module import NativeModule
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node


def read(location: Location, interpreter, arguments: Arguments) -> Node:
    """One line from the interpreter's input, newline included ("" at EOF)."""
    try:
        return Node.string(interpreter.input.readline(), location)
    except OSError as error:
        raise KorispIOError(error) from error


MODULE = NativeModule("io", functions=[("read", read, "")])
