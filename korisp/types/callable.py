"""The four Callable variants and the call contract they share.

Every variant exposes `call(location, interpreter, arguments)`, `callable_type`
and `parameters`. Native variants hand the validated Arguments straight to
their Python implementation. User variants bind the Arguments into a fresh
frame whose parent is the environment they were created in, evaluate their
body there and return the last value (nil for an empty body).

Callables are immutable once built and are shared between every Node, frame
and Interpreter that refers to them.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from korisp import NativeImpl
from korisp.types.arguments import Arguments
from korisp.types.environment import Environment
from korisp.types.location import Location
from korisp.types.node import Node
from korisp.types.parameters import Parameters

if TYPE_CHECKING:
    from korisp.evaluation.interpreter import Interpreter


class CallableType(Enum):
    NATIVE_FUNCTION = "native fn"
    NATIVE_MACRO = "native macro"
    FUNCTION = "fn"
    MACRO = "macro"

    @property
    def is_macro(self) -> bool:
        return self in (CallableType.NATIVE_MACRO, CallableType.MACRO)

    def __str__(self) -> str:
        return self.value


class _Native:
    __slots__ = ("name", "impl", "parameters")

    callable_type: CallableType

    def __init__(self, name: str, impl: NativeImpl, parameters: Parameters):
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "impl", impl)
        object.__setattr__(self, "parameters", parameters)

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def from_dsl(cls, name: str, impl: NativeImpl, contract: str):
        return cls(name, impl, Parameters.parse(contract))

    @property
    def is_macro(self) -> bool:
        return self.callable_type.is_macro

    def call(self, location: Location, interpreter: Interpreter, arguments: Arguments) -> Node:
        return self.impl(location, interpreter, arguments)

    def __str__(self) -> str:
        return f"<{self.callable_type} {self.name} {self.parameters}>"

    def __repr__(self) -> str:
        return str(self)


class NativeFunction(_Native):
    """A Python implementation receiving evaluated arguments."""

    __slots__ = ()
    callable_type = CallableType.NATIVE_FUNCTION


class NativeMacro(_Native):
    """A Python implementation receiving raw argument nodes and returning a
    node that is then evaluated in the caller's environment."""

    __slots__ = ()
    callable_type = CallableType.NATIVE_MACRO


class _UserDefined:
    __slots__ = ("parameters", "body", "closure")

    callable_type: CallableType

    def __init__(self, parameters: Parameters, body: list[Node], closure: Environment):
        object.__setattr__(self, "parameters", parameters)
        object.__setattr__(self, "body", tuple(body))
        object.__setattr__(self, "closure", closure)

    def __setattr__(self, key, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def is_macro(self) -> bool:
        return self.callable_type.is_macro

    def call(self, location: Location, interpreter: Interpreter, arguments: Arguments) -> Node:
        frame = Environment(parent=self.closure)
        arguments.add_to_env(frame, location)
        result = Node.nil(location)
        with interpreter.scope(frame):
            for node in self.body:
                result = interpreter.evaluate(node)
        return result

    def __str__(self) -> str:
        return f"<{self.callable_type} {self.parameters}>"

    def __repr__(self) -> str:
        return str(self)


class Function(_UserDefined):
    __slots__ = ()
    callable_type = CallableType.FUNCTION


class Macro(_UserDefined):
    __slots__ = ()
    callable_type = CallableType.MACRO


Callable = NativeFunction | NativeMacro | Function | Macro
