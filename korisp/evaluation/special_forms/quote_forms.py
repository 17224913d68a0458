from korisp.errors import KorispError, InvalidNodeArgument
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node, NodeKind, LIST_KINDS, MAP_KINDS
from korisp.types.parameters import Parameters, ParameterType

QUOTE = Parameters.parse("x")

_TEMPLATE_SEQUENCES = (
    NodeKind.PTUPLE,
    NodeKind.BTUPLE,
    NodeKind.PARRAY,
    NodeKind.BARRAY,
)


def eval_quasiquote(interpreter, node: Node, depth: int = 1) -> Node:
    """Copy `node`, evaluating `(unquote e)` at depth 1 and inlining the
    elements of `(splice e)` into the enclosing sequence."""
    if node.is_form("unquote") and len(node.data) == 2:
        if depth == 1:
            return interpreter.evaluate(node.data[1])
        inner = eval_quasiquote(interpreter, node.data[1], depth - 1)
        return Node.ptuple([node.data[0], inner], node.location)

    if node.is_form("quasiquote") and len(node.data) == 2:
        inner = eval_quasiquote(interpreter, node.data[1], depth + 1)
        return Node.ptuple([node.data[0], inner], node.location)

    if node.kind in _TEMPLATE_SEQUENCES:
        items: list[Node] = []
        for item in node.data:
            if depth == 1 and item.is_form("splice") and len(item.data) == 2:
                spliced = eval_quasiquote(interpreter, item.data[1], depth)
                if spliced.kind not in LIST_KINDS:
                    raise InvalidNodeArgument((ParameterType.LIST,), spliced, item.location)
                items.extend(spliced.data)
                continue
            items.append(eval_quasiquote(interpreter, item, depth))
        return Node(node.kind, items, node.location)

    if node.kind in MAP_KINDS:
        entries = {
            eval_quasiquote(interpreter, k, depth): eval_quasiquote(interpreter, v, depth)
            for k, v in node.data.items()
        }
        return Node(node.kind, entries, node.location)

    return node.clone()


def quote_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    Arguments.from_nodes(QUOTE, nodes)
    return nodes[0].clone()


def quasiquote_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    Arguments.from_nodes(QUOTE, nodes)
    return eval_quasiquote(interpreter, nodes[0])


def unquote_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    raise KorispError("unquote is not valid outside of quasiquote")


def splice_form(location: Location, interpreter, nodes: list[Node]) -> Node:
    raise KorispError("splice is only valid in call arguments or inside quasiquote")
