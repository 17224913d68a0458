"""Scope frames for Korisp.

An Environment stores name -> Node bindings and an optional parent frame.
Lookups walk outward to the root. A module is a parentless Environment wrapped
in a MODULE node, so `module/member` resolves through that namespace value.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator

from korisp.errors import (
    KorispDuplicateDefinition,
    KorispImmutableBinding,
    KorispUndefinedSymbol,
)
from korisp.types.location import Location
from korisp.types.node import Node, NodeKind

MODULE_SEPARATOR = "/"


class _Binding:
    __slots__ = ("value", "mutable")

    def __init__(self, value: Node, mutable: bool):
        self.value = value
        self.mutable = mutable


class Environment:
    """Hierarchical mapping from names to Nodes."""

    __slots__ = ("vars", "parent", "name")

    def __init__(self, parent: Environment | None = None, name: str | None = None):
        self.vars: dict[str, _Binding] = {}
        self.parent: Environment | None = parent
        self.name: str | None = name

    def define(self, name: str, value: Node, mutable: bool = False) -> None:
        """Bind `name` in this frame.

        Raises KorispDuplicateDefinition if this frame already holds an
        immutable binding for `name`. A mutable (`var`) binding may be redefined.
        """
        existing = self.vars.get(name)
        if existing is not None and not existing.mutable:
            raise KorispDuplicateDefinition(name)
        self.vars[name] = _Binding(value, mutable)

    def set(self, name: str, value: Node) -> None:
        env = self._find(name)
        if env is None:
            raise KorispUndefinedSymbol(name)
        binding = env.vars[name]
        if not binding.mutable:
            raise KorispImmutableBinding(name)
        binding.value = value

    def _find(self, name: str) -> Environment | None:
        env: Environment | None = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.parent
        return None

    def get(self, name: str) -> Node | None:
        env = self._find(name)
        if env is not None:
            return env.vars[name].value

        module_name, sep, member = name.partition(MODULE_SEPARATOR)
        if sep and module_name and member:
            module = self.get(module_name)
            if module is not None and module.kind is NodeKind.MODULE:
                return module.data.get(member)
        return None

    def lookup(self, name: str, location: Location | None = None) -> Node:
        value = self.get(name)
        if value is None:
            raise KorispUndefinedSymbol(name, location)
        return value

    def has(self, name: str) -> bool:
        """True if `name` resolves from this frame, parents included."""
        return self.get(name) is not None

    def has_in_scope(self, name: str) -> bool:
        """True only if this frame itself binds `name`."""
        return name in self.vars

    def merge(self, other: Environment) -> None:
        for name, binding in other.vars.items():
            if name in self.vars:
                raise KorispDuplicateDefinition(name)
            self.vars[name] = _Binding(binding.value, binding.mutable)

    def root(self) -> Environment:
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def depth(self) -> int:
        count = 0
        env = self.parent
        while env is not None:
            count += 1
            env = env.parent
        return count

    def items(self) -> Iterator[tuple[str, Node]]:
        for name, binding in self.vars.items():
            yield name, binding.value

    def __len__(self) -> int:
        return len(self.vars)

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def format_table(self) -> str:
        """Two-column listing of this frame's bindings, sorted by name."""
        rows = sorted(self.items(), key=lambda item: item[0])
        width = max((len(name) for name, _ in rows), default=0)
        with StringIO() as buffer:
            buffer.write(f"<module {self.name or '?'}> ({len(rows)} entries)\n")
            for name, value in rows:
                buffer.write(f"  {name.ljust(width)}  {value}\n")
            return buffer.getvalue()

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("{")
            buffer.write(", ".join(f"{k}: {v}" for k, v in self.items()))
            buffer.write("}")
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment {self.name or '?'} depth={self.depth()} size={len(self)}>"
