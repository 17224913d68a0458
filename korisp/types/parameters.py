"""Calling contracts: ParameterType, Parameter, Parameters and their Arity.

Contracts can be built programmatically or parsed from a compact DSL:

    "a b:string|buffer &opt c & d"

- A bare identifier accepts any value.
- `name:type1|type2` restricts the accepted types.
- `&opt` makes every following parameter optional.
- `&` marks the next parameter, which must be the last, as the rest parameter.

Every native function and macro declares its contract this way, so a DSL
error is a bug in a native module and surfaces when that module is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Iterator

from korisp.errors import (
    KorispContractError,
    InvalidParameterType,
    NonLastParameterIsRest,
    RequiredParameterAfterOptional,
)
from korisp.types.node import Node, NodeKind, LIST_KINDS, MAP_KINDS, TEXT_KINDS

OPTIONAL_MARKER = "&opt"
REST_MARKER = "&"


class ParameterType(Enum):
    BOOLEAN = "bool"
    NUMBER = "number"
    SYMBOL = "symbol"
    KEYWORD = "keyword"
    STRING = "string"
    LIST = "list"
    MAP = "map"
    MODULE = "module"
    FUNCTION = "function"
    NIL = "nil"

    @classmethod
    def parse(cls, name: str) -> ParameterType:
        try:
            return cls(name)
        except ValueError:
            raise InvalidParameterType(name) from None

    def node_is_type(self, node: Node) -> bool:
        return node.kind in _ACCEPTED_KINDS[self]

    def __str__(self) -> str:
        return self.value


_ACCEPTED_KINDS: dict[ParameterType, frozenset[NodeKind]] = {
    ParameterType.BOOLEAN: frozenset({NodeKind.TRUE, NodeKind.FALSE}),
    ParameterType.NUMBER: frozenset({NodeKind.NUMBER}),
    ParameterType.SYMBOL: frozenset({NodeKind.SYMBOL}),
    ParameterType.KEYWORD: frozenset({NodeKind.KEYWORD}),
    ParameterType.STRING: TEXT_KINDS,
    ParameterType.LIST: LIST_KINDS,
    ParameterType.MAP: MAP_KINDS,
    ParameterType.MODULE: frozenset({NodeKind.MODULE}),
    ParameterType.FUNCTION: frozenset({NodeKind.CALLABLE}),
    ParameterType.NIL: frozenset({NodeKind.NIL}),
}


class ArityKind(Enum):
    NONE = "none"
    FIXED = "fixed"
    OPTIONAL = "optional"
    REST = "rest"


@dataclass(frozen=True)
class Arity:
    """Argument-count class derived from a Parameters contract."""

    kind: ArityKind
    minimum: int = 0
    maximum: int | None = 0

    def accepts(self, count: int) -> bool:
        match self.kind:
            case ArityKind.NONE:
                return count == 0
            case ArityKind.FIXED:
                return count == self.minimum
            case ArityKind.OPTIONAL:
                return self.minimum <= count <= self.maximum
            case _:
                return count >= self.minimum

    def describe(self) -> str:
        match self.kind:
            case ArityKind.NONE:
                return "0"
            case ArityKind.FIXED:
                return str(self.minimum)
            case ArityKind.OPTIONAL:
                return f"{self.minimum}-{self.maximum}"
            case _:
                return f"at least {self.minimum}"

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class Parameter:
    name: str
    types: tuple[ParameterType, ...] = field(default=())
    optional: bool = False
    rest: bool = False

    @classmethod
    def parse(cls, token: str) -> Parameter:
        """Parse a single `name` or `name:type1|type2` token."""
        name, sep, type_names = token.partition(":")
        if not sep:
            return cls(name)
        types: list[ParameterType] = []
        for type_name in type_names.split("|"):
            ptype = ParameterType.parse(type_name)
            if ptype not in types:
                types.append(ptype)
        return cls(name, tuple(types))

    def as_optional(self) -> Parameter:
        return replace(self, optional=True)

    def as_rest(self) -> Parameter:
        return replace(self, rest=True)

    def accepts(self, node: Node) -> bool:
        """An empty type set accepts anything."""
        return not self.types or any(t.node_is_type(node) for t in self.types)

    def __str__(self) -> str:
        if not self.types:
            return self.name
        return f"{self.name}:{'|'.join(str(t) for t in self.types)}"


class Parameters:
    """An ordered, validated sequence of Parameter."""

    __slots__ = ("parameters",)

    def __init__(self, parameters: Iterable[Parameter] = ()):
        parameters = tuple(parameters)
        if any(p.rest for p in parameters[:-1]):
            raise NonLastParameterIsRest()
        first_optional = next((i for i, p in enumerate(parameters) if p.optional), None)
        if first_optional is not None and not all(
            p.optional for p in parameters[first_optional:]
        ):
            raise RequiredParameterAfterOptional()
        names = [p.name for p in parameters]
        if len(set(names)) != len(names):
            raise KorispContractError(f"Duplicate parameter name in {names}")
        self.parameters: tuple[Parameter, ...] = parameters

    @classmethod
    def none(cls) -> Parameters:
        return cls()

    @classmethod
    def parse(cls, text: str) -> Parameters:
        text = text.strip()
        if text.startswith("[") and text.endswith("]"):
            text = text[1:-1]

        optional = False
        rest = False
        params: list[Parameter] = []
        for token in text.split():
            if token == OPTIONAL_MARKER:
                optional = True
                continue
            if token == REST_MARKER:
                rest = True
                continue
            param = Parameter.parse(token)
            if optional:
                param = param.as_optional()
            if rest:
                param = param.as_rest()
            params.append(param)

        if rest and not (params and params[-1].rest):
            raise KorispContractError(f"'{REST_MARKER}' must be followed by a parameter")
        return cls(params)

    @property
    def has_rest(self) -> bool:
        # A rest parameter is always the last one.
        return bool(self.parameters) and self.parameters[-1].rest

    @property
    def arity(self) -> Arity:
        count = len(self.parameters)
        if count == 0:
            return Arity(ArityKind.NONE)
        required = sum(1 for p in self.parameters if not p.optional)
        if self.has_rest:
            return Arity(ArityKind.REST, required, None)
        if required == count:
            return Arity(ArityKind.FIXED, count, count)
        return Arity(ArityKind.OPTIONAL, required, count)

    def last(self) -> Parameter | None:
        return self.parameters[-1] if self.parameters else None

    def __len__(self) -> int:
        return len(self.parameters)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self.parameters)

    def __getitem__(self, index: int) -> Parameter:
        return self.parameters[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameters):
            return NotImplemented
        return self.parameters == other.parameters

    def __hash__(self) -> int:
        return hash(self.parameters)

    def __str__(self) -> str:
        tokens = [str(p) for p in self.parameters]
        first_optional = next((i for i, p in enumerate(self.parameters) if p.optional), None)
        if first_optional is not None:
            tokens.insert(first_optional, OPTIONAL_MARKER)
        if self.has_rest:
            tokens.insert(len(tokens) - 1, REST_MARKER)
        return f"[{' '.join(tokens)}]"

    def __repr__(self) -> str:
        return f"Parameters({self})"
