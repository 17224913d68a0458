"""NativeModule: a named table of native functions and macros.

Each entry is declared as a `(name, implementation, contract)` triple, where
`contract` uses the parameter DSL. The callables are built once, when the
module object is created, so a malformed contract fails at import time.
"""

from __future__ import annotations

from typing import Iterable

from korisp import NativeImpl
from korisp.types.callable import NativeFunction, NativeMacro
from korisp.types.environment import Environment
from korisp.types.node import Node

NativeTuple = tuple[str, NativeImpl, str]


class NativeModule:
    __slots__ = ("name", "core", "functions", "macros")

    def __init__(
        self,
        name: str,
        functions: Iterable[NativeTuple] = (),
        macros: Iterable[NativeTuple] = (),
        core: bool = False,
    ):
        self.name: str = name
        self.core: bool = core
        self.functions: tuple[NativeFunction, ...] = tuple(
            NativeFunction.from_dsl(*entry) for entry in functions
        )
        self.macros: tuple[NativeMacro, ...] = tuple(
            NativeMacro.from_dsl(*entry) for entry in macros
        )

    def is_core_module(self) -> bool:
        """Core modules are merged into the root scope instead of namespaced."""
        return self.core

    def environment(self) -> Environment:
        """A fresh, parentless Environment holding every entry of this module."""
        env = Environment(name=self.name)
        for callable_ in (*self.functions, *self.macros):
            env.define(callable_.name, Node.callable(callable_))
        return env

    def __repr__(self) -> str:
        kind = "core" if self.core else "namespaced"
        return f"<NativeModule {self.name} ({kind}, {len(self.functions) + len(self.macros)} entries)>"
