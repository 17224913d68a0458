from __future__ import annotations

from korisp.native.module import NativeModule
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node


def lsmod(location: Location, interpreter, arguments: Arguments) -> Node:
    """Print the bindings of a module, or of the current frame."""
    module = arguments.get(0)
    environment = interpreter.environment if module is None else module.data
    interpreter.output.write(environment.format_table())
    return Node.nil(location)


MODULE = NativeModule("debug", functions=[("lsmod", lsmod, "&opt m:module")])
