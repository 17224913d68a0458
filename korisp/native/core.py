"""Core natives: printing, evaluation helpers and the standard macros.

The macros here only build new Nodes. Every synthesized node carries the
location of the node it replaces, so errors in expanded code still point at
real source.
"""

from __future__ import annotations

from korisp.errors import KorispValueError
from korisp.native.module import NativeModule
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node


def println(location: Location, interpreter, arguments: Arguments) -> Node:
    interpreter.output.write("".join(a.text() for a in arguments) + "\n")
    return Node.nil(location)


def print_(location: Location, interpreter, arguments: Arguments) -> Node:
    interpreter.output.write("".join(a.text() for a in arguments))
    return Node.nil(location)


def is_nil(location: Location, interpreter, arguments: Arguments) -> Node:
    return Node.boolean(arguments.unwrap(0).is_nil(), location)


def eval_(location: Location, interpreter, arguments: Arguments) -> Node:
    return interpreter.evaluate(arguments.unwrap(0))


def expand(location: Location, interpreter, arguments: Arguments) -> Node:
    return interpreter.expand_once(arguments.unwrap(0))


# --- Macros ---
def cond(location: Location, interpreter, arguments: Arguments) -> Node:
    """(cond t1 r1 t2 r2 ... [default]) -> nested ifs, built from the end."""
    nodes = arguments.unwrap_from(0)
    node = nodes.pop() if len(nodes) % 2 == 1 else Node.nil(location)
    for index in range(len(nodes) - 2, -1, -2):
        test, result = nodes[index], nodes[index + 1]
        node = Node.ptuple(
            [Node.symbol("if", test.location), test, result, node], test.location
        )
    return node


def _define_callable(kind: str, location: Location, arguments: Arguments) -> Node:
    name, params, *body = arguments.unwrap_from(0)
    literal = Node.ptuple([Node.symbol(kind, location), params, *body], location)
    return Node.ptuple([Node.symbol("def", location), name, literal], location)


def defn(location: Location, interpreter, arguments: Arguments) -> Node:
    """(defn name [params] body...) -> (def name (fn [params] body...))"""
    return _define_callable("fn", location, arguments)


def defmacro(location: Location, interpreter, arguments: Arguments) -> Node:
    return _define_callable("macro", location, arguments)


def let(location: Location, interpreter, arguments: Arguments) -> Node:
    """(let [a 1 b 2] body...) -> ((fn [] (def a 1) (def b 2) body...))

    The bindings live in the frame of an immediately called function, so
    they disappear once the body has run.
    """
    bindings = arguments.unwrap_list(0)
    if len(bindings) % 2 != 0:
        raise KorispValueError("let requires an even number of binding forms", location)
    body = [
        Node.ptuple([Node.symbol("def", name.location), name, value], name.location)
        for name, value in zip(bindings[::2], bindings[1::2])
    ]
    body.extend(arguments.unwrap_from(1))
    fn = Node.ptuple([Node.symbol("fn", location), Node.btuple([], location), *body], location)
    return Node.ptuple([fn], location)


SHORT_FN_PARAMETERS = ("&opt", "$0", "$1", "$2", "$3")


def short_fn(location: Location, interpreter, arguments: Arguments) -> Node:
    """|(+ $ 1) -> (fn [&opt $0 $1 $2 $3] (def $ $0) (+ $ 1))"""
    params = Node.btuple([Node.symbol(p, location) for p in SHORT_FN_PARAMETERS], location)
    alias = Node.ptuple(
        [Node.symbol("def", location), Node.symbol("$", location), Node.symbol("$0", location)],
        location,
    )
    return Node.ptuple([Node.symbol("fn", location), params, alias, arguments.unwrap(0)], location)


MODULE = NativeModule(
    "core",
    functions=[
        ("println", println, "&opt & s"),
        ("print", print_, "&opt & s"),
        ("is-nil", is_nil, "v"),
        ("eval", eval_, "node"),
        ("expand", expand, "node"),
    ],
    macros=[
        ("cond", cond, "&opt & pairs"),
        ("defn", defn, "name:symbol params:list & body"),
        ("defmacro", defmacro, "name:symbol params:list & body"),
        ("let", let, "bindings:list & body"),
        ("short-fn", short_fn, "body"),
    ],
    core=True,
)
