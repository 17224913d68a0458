"""Arguments: one call's argument nodes, validated against a Parameters contract.

Validation happens entirely in `Arguments.from_nodes`; an Arguments object that
exists has already passed the arity and type checks, so binding it into a
frame can never stop half way.
"""

from __future__ import annotations

from typing import Iterator

from korisp.errors import (
    KorispArityError,
    KorispContractError,
    InvalidNodeArgument,
    KorispInternalError,
)
from korisp.types.location import Location
from korisp.types.node import Node, NodeKind, LIST_KINDS, TEXT_KINDS
from korisp.types.parameters import Parameter, Parameters, ParameterType


class Arguments:
    __slots__ = ("parameters", "arguments")

    def __init__(self, parameters: Parameters, arguments: list[Node]):
        self.parameters: Parameters = parameters
        self.arguments: list[Node] = arguments

    @classmethod
    def from_nodes(cls, parameters: Parameters, arguments: list[Node]) -> Arguments:
        args = cls(parameters, list(arguments))
        args._check_amount()
        args._check_types()
        return args

    def _check_amount(self) -> None:
        arity = self.parameters.arity
        if not arity.accepts(len(self.arguments)):
            raise KorispArityError(arity, len(self.arguments))

    def _check_types(self) -> None:
        # Lengths are already checked: zip pairs every declared position.
        for param, arg in zip(self.parameters, self.arguments):
            if not param.accepts(arg):
                raise self._argument_error(param, arg)

        # Surplus arguments are all governed by the rest parameter's types.
        if self.parameters.has_rest:
            last = self.parameters.last()
            for arg in self.arguments[len(self.parameters):]:
                if not last.accepts(arg):
                    raise self._argument_error(last, arg)

    @staticmethod
    def _argument_error(parameter: Parameter, node: Node) -> InvalidNodeArgument:
        return InvalidNodeArgument(parameter.types, node)

    def add_to_env(self, environment, location: Location | None = None) -> None:
        """Bind every parameter in `environment`, cloning each argument.

        Unsupplied optional parameters are bound to nil; the rest parameter is
        bound to a tuple of every remaining argument.
        """
        for index, param in enumerate(self.parameters):
            if param.rest:
                surplus = [a.clone() for a in self.arguments[index:]]
                value = Node.btuple(surplus, surplus[0].location if surplus else location)
            elif index < len(self.arguments):
                value = self.arguments[index].clone()
            else:
                value = Node.nil(location)
            environment.define(param.name, value)

    # --- Access helpers for native implementations ---
    def __len__(self) -> int:
        return len(self.arguments)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.arguments)

    def __getitem__(self, index: int) -> Node:
        return self.arguments[index]

    def is_empty(self) -> bool:
        return not self.arguments

    def get(self, index: int) -> Node | None:
        if 0 <= index < len(self.arguments):
            return self.arguments[index]
        return None

    def unwrap(self, index: int) -> Node:
        node = self.get(index)
        if node is None:
            raise KorispInternalError(f"Called unwrap on invalid index {index}.")
        return node

    def unwrap_from(self, index: int) -> list[Node]:
        return list(self.arguments[index:])

    def _unwrap_kind(self, index: int, kinds, label: str) -> Node:
        node = self.unwrap(index)
        if node.kind not in kinds:
            raise KorispInternalError(f"Called unwrap_{label} on {node.kind.name}")
        return node

    def unwrap_number(self, index: int) -> float:
        return self._unwrap_kind(index, (NodeKind.NUMBER,), "number").data

    def unwrap_numbers(self) -> list[float]:
        return [self.unwrap_number(i) for i in range(len(self.arguments))]

    def unwrap_string(self, index: int) -> str:
        return self._unwrap_kind(index, TEXT_KINDS, "string").data

    def unwrap_symbol(self, index: int) -> str:
        return self._unwrap_kind(index, (NodeKind.SYMBOL,), "symbol").data

    def unwrap_keyword(self, index: int) -> str:
        return self._unwrap_kind(index, (NodeKind.KEYWORD,), "keyword").data

    def unwrap_list(self, index: int) -> list[Node]:
        return list(self._unwrap_kind(index, LIST_KINDS, "list").data)

    def unwrap_function(self, index: int):
        return self._unwrap_kind(index, (NodeKind.CALLABLE,), "function").data

    def unwrap_module(self, index: int):
        return self._unwrap_kind(index, (NodeKind.MODULE,), "module").data

    def parse_parameters(self, index: int) -> Parameters:
        """Read a `[a b:number & c]` tuple of symbols as a Parameters contract."""
        return parameters_from_node(self.unwrap(index))

    def __repr__(self) -> str:
        return f"Arguments({self.parameters}, {self.arguments!r})"


def parameters_from_node(node: Node) -> Parameters:
    if node.kind not in LIST_KINDS:
        raise InvalidNodeArgument((ParameterType.LIST,), node, node.location)
    names: list[str] = []
    for item in node.data:
        if not item.is_symbol():
            raise InvalidNodeArgument((ParameterType.SYMBOL,), item, item.location)
        names.append(item.data)
    try:
        return Parameters.parse(" ".join(names))
    except KorispContractError as error:
        raise error.attach_location(node.location)
