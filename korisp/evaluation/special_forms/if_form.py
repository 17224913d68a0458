from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node
from korisp.types.parameters import Parameters

IF = Parameters.parse("test then &opt else")


def if_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    """(if test then [else]); only nil and false select the else branch."""
    Arguments.from_nodes(IF, nodes)
    if interpreter.evaluate(nodes[0]).is_truthy():
        return interpreter.evaluate(nodes[1])
    if len(nodes) > 2:
        return interpreter.evaluate(nodes[2])
    return Node.nil(location)
