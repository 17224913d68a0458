from korisp.types.arguments import Arguments, parameters_from_node
from korisp.types.callable import Function, Macro
from korisp.types.location import Location
from korisp.types.node import Node
from korisp.types.parameters import Parameters

CALLABLE_LITERAL = Parameters.parse("params:list &opt & body")


def fn_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    """(fn [params] body...) closes over the current frame."""
    Arguments.from_nodes(CALLABLE_LITERAL, nodes)
    params, *body = nodes
    function = Function(parameters_from_node(params), body, interpreter.environment)
    return Node.callable(function, location)


def macro_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    """(macro [params] body...): the body receives the raw argument nodes and
    its value is evaluated again at the call site."""
    Arguments.from_nodes(CALLABLE_LITERAL, nodes)
    params, *body = nodes
    macro = Macro(parameters_from_node(params), body, interpreter.environment)
    return Node.callable(macro, location)
