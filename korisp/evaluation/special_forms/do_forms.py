from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node
from korisp.types.parameters import Parameters

DO = Parameters.parse("&opt & body")
WHILE = Parameters.parse("test &opt & body")


def do_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    Arguments.from_nodes(DO, nodes)
    return interpreter.evaluate_body(nodes, location)


def while_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    """(while test body...)

    The test runs in the current frame; every iteration of the body gets a
    fresh child frame, so `def` inside the loop does not collide with the
    previous iteration.
    """
    Arguments.from_nodes(WHILE, nodes)
    test, *body = nodes
    while interpreter.evaluate(test).is_truthy():
        with interpreter.scope():
            interpreter.evaluate_body(body, location)
    return Node.nil(location)
