"""Tree-walking evaluator for Korisp.

The Interpreter owns an explicit stack of Environment frames. Calls push a
frame through `scope()` and always pop it again, error or not. Evaluation of
a call expression goes through four stages:

1. a special form named by the head symbol is dispatched before anything else;
2. the head is evaluated and must produce a CALLABLE node;
3. functions receive evaluated arguments, macros receive the raw nodes, and in
   both cases the arguments are validated against the callable's Parameters;
4. a macro's result is evaluated again in the caller's frame.

Errors leaving a call are stamped with the call's location unless a deeper
call already stamped them.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

from korisp.config import debug_expansion
from korisp.errors import KorispError, KorispNotCallable, InvalidNodeArgument
from korisp.evaluation.special_forms import SPECIAL_FORMS
from korisp.types.arguments import Arguments
from korisp.types.callable import Callable
from korisp.types.environment import Environment
from korisp.types.location import Location
from korisp.types.node import Node, NodeKind, LIST_KINDS
from korisp.types.parameters import ParameterType

logger = logging.getLogger(__name__)

SPLICE = "splice"


class Interpreter:
    """Evaluates Nodes against a stack of Environment frames."""

    def __init__(
        self,
        environment: Environment | None = None,
        output: TextIO | None = None,
        input: TextIO | None = None,
    ):
        if environment is None:
            from korisp.native import build_root_environment

            environment = build_root_environment()
        self._frames: list[Environment] = [environment]
        self.output: TextIO = output if output is not None else sys.stdout
        self.input: TextIO = input if input is not None else sys.stdin

    # --- Frame stack ---
    @property
    def environment(self) -> Environment:
        return self._frames[-1]

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push_environment(self, environment: Environment) -> None:
        self._frames.append(environment)

    def pop_environment(self) -> Environment:
        if len(self._frames) == 1:
            raise RuntimeError("Cannot pop the root environment")
        return self._frames.pop()

    @contextmanager
    def scope(self, environment: Environment | None = None) -> Iterator[Environment]:
        """Run a block with `environment` (default: a child of the current
        frame) pushed, popping it on every exit path."""
        if environment is None:
            environment = Environment(parent=self.environment)
        self.push_environment(environment)
        try:
            yield environment
        finally:
            self.pop_environment()

    # --- Entry points ---
    def interpret(self, source: str) -> Node:
        from korisp.reader.parser import parse

        return self.evaluate(parse(source))

    def evaluate(self, node: Node) -> Node:
        match node.kind:
            case NodeKind.MAIN:
                return self.evaluate_body(node.data, node.location)
            case NodeKind.TABLE | NodeKind.STRUCT:
                entries = {self.evaluate(k): self.evaluate(v) for k, v in node.data.items()}
                return Node(node.kind, entries, node.location)
            case NodeKind.PARRAY | NodeKind.BARRAY | NodeKind.BTUPLE:
                return Node(node.kind, [self.evaluate(n) for n in node.data], node.location)
            case NodeKind.PTUPLE:
                if not node.data:
                    return Node.nil(node.location)
                return self.evaluate_call(node)
            case NodeKind.SYMBOL:
                return self.environment.lookup(node.data, node.location)
            case _:
                return node

    def evaluate_body(self, nodes, location: Location | None = None) -> Node:
        """Evaluate `nodes` in order; the last value, or nil if empty."""
        result = Node.nil(location)
        for node in nodes:
            result = self.evaluate(node)
        return result

    # --- Calls ---
    def evaluate_call(self, node: Node) -> Node:
        head, *rest = node.data
        location = node.location
        try:
            if head.kind is NodeKind.SYMBOL and head.data in SPECIAL_FORMS:
                return SPECIAL_FORMS[head.data](location, interpreter=self, nodes=rest)

            callee = self.evaluate(head)
            if callee.kind is not NodeKind.CALLABLE:
                raise KorispNotCallable(callee)
            callable_ = callee.data

            if callable_.is_macro:
                expansion = self.expand_call(location, callable_, rest)
                return self.evaluate(expansion)

            values = self.evaluate_arguments(rest)
            return self.apply(callable_, location, values)
        except KorispError as error:
            raise error.attach_location(location)

    def evaluate_arguments(self, nodes: list[Node]) -> list[Node]:
        """Evaluate call arguments left to right, inlining `(splice e)`."""
        values: list[Node] = []
        for node in nodes:
            if node.is_form(SPLICE) and len(node.data) == 2:
                spliced = self.evaluate(node.data[1])
                if spliced.kind not in LIST_KINDS:
                    raise InvalidNodeArgument((ParameterType.LIST,), spliced, node.location)
                values.extend(spliced.data)
            else:
                values.append(self.evaluate(node))
        return values

    def expand_call(self, location: Location, macro: Callable, nodes: list[Node]) -> Node:
        """Run `macro` on the raw `nodes` and return the synthesized node."""
        arguments = Arguments.from_nodes(macro.parameters, nodes)
        expansion = macro.call(location, self, arguments)
        if debug_expansion():
            logger.debug("%s expanded to %s", location, expansion)
        return expansion

    def expand_once(self, node: Node) -> Node:
        """One expansion step of a macro call; any other node is returned as is."""
        if node.kind is not NodeKind.PTUPLE or not node.data:
            return node
        head, *rest = node.data
        if head.kind is NodeKind.SYMBOL and head.data in SPECIAL_FORMS:
            return node
        try:
            callee = self.evaluate(head)
        except KorispError:
            return node
        if callee.kind is not NodeKind.CALLABLE or not callee.data.is_macro:
            return node
        try:
            return self.expand_call(node.location, callee.data, rest)
        except KorispError as error:
            raise error.attach_location(node.location)

    def apply(self, callable_: Callable, location: Location, values: list[Node]) -> Node:
        """Call `callable_` with already evaluated `values`.

        Macros handed to higher-order natives are expanded and the expansion
        evaluated, so both kinds behave like functions here.
        """
        arguments = Arguments.from_nodes(callable_.parameters, values)
        result = callable_.call(location, self, arguments)
        if callable_.is_macro:
            return self.evaluate(result)
        return result
