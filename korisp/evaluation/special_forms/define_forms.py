"""Binding forms: def (immutable), var (mutable) and set (update a var)."""

from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node
from korisp.types.parameters import Parameters

BINDING = Parameters.parse("name:symbol value")


def _bind(interpreter, nodes: list[Node], mutable: bool) -> Node:
    Arguments.from_nodes(BINDING, nodes)
    name, value_node = nodes
    value = interpreter.evaluate(value_node)
    interpreter.environment.define(name.data, value, mutable=mutable)
    return value


def def_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    return _bind(interpreter, nodes, mutable=False)


def var_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    return _bind(interpreter, nodes, mutable=True)


def set_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    Arguments.from_nodes(BINDING, nodes)
    name, value_node = nodes
    value = interpreter.evaluate(value_node)
    interpreter.environment.set(name.data, value)
    return value
