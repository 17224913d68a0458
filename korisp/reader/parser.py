"""Korisp reader: turns tokens into a located Node tree.

- `(...)` PTuple, `[...]` BTuple, `{...}` Struct
- `@(...)` PArray, `@[...]` BArray, `@{...}` Table
- `"..."` String, `@"..."` Buffer
- numbers, `:keywords`, `true`, `false`, `nil`, everything else a Symbol
- reader macros expand to ordinary call forms:
    'x -> (quote x)    ~x -> (quasiquote x)    ,x -> (unquote x)
    ;x -> (splice x)   |x -> (short-fn x)
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from korisp.errors import KorispSyntaxError
from korisp.reader.lexer import Token, CLOSERS, NUMBER_RE, lex
from korisp.types.location import Location
from korisp.types.node import Node, NodeKind

READER_MACROS: dict[str, str] = {
    "'": "quote",
    "~": "quasiquote",
    ",": "unquote",
    ";": "splice",
    "|": "short-fn",
}

OPENERS: dict[str, NodeKind] = {
    "(": NodeKind.PTUPLE,
    "[": NodeKind.BTUPLE,
    "{": NodeKind.STRUCT,
    "@(": NodeKind.PARRAY,
    "@[": NodeKind.BARRAY,
    "@{": NodeKind.TABLE,
}

LITERALS = {"true": NodeKind.TRUE, "false": NodeKind.FALSE, "nil": NodeKind.NIL}

ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", '"': '"', "\\": "\\"}
ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def unescape(text: str, location: Location) -> str:
    def replace(match: re.Match) -> str:
        char = match.group(1)
        if char not in ESCAPES:
            raise KorispSyntaxError(f"Unknown escape sequence '\\{char}'", location)
        return ESCAPES[char]

    return ESCAPE_RE.sub(replace, text)


class TokenStream:
    def __init__(self, tokens: Iterable[Token]):
        self.tokens: Iterator[Token] = iter(tokens)
        self.buffer: list[Token] = []

    def peek(self) -> Token | None:
        if not self.buffer:
            token = next(self.tokens, None)
            if token is None:
                return None
            self.buffer.append(token)
        return self.buffer[0]

    def advance(self) -> Token | None:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_expr(self) -> Node | None:
        token = self.advance()
        if token is None:
            return None

        match token.kind:
            case "reader_macro":
                return self._parse_reader_macro(token)
            case "open":
                return self._parse_collection(token)
            case "close":
                raise KorispSyntaxError(f"Unexpected '{token.text}'", token.location)
            case "string":
                return self._parse_string(token)
            case _:
                return parse_atom(token)

    def _parse_reader_macro(self, token: Token) -> Node:
        inner = self.parse_expr()
        if inner is None:
            raise KorispSyntaxError(
                f"Expected an expression after '{token.text}'", token.location
            )
        head = Node.symbol(READER_MACROS[token.text], token.location)
        return Node.ptuple([head, inner], token.location)

    def _parse_collection(self, opener: Token) -> Node:
        closer = CLOSERS[opener.text]
        items: list[Node] = []
        while True:
            token = self.peek()
            if token is None:
                raise KorispSyntaxError(f"Unclosed '{opener.text}'", opener.location)
            if token.kind == "close":
                self.advance()
                if token.text != closer:
                    raise KorispSyntaxError(
                        f"Expected '{closer}' to close '{opener.text}', found '{token.text}'",
                        token.location,
                    )
                break
            items.append(self.parse_expr())

        kind = OPENERS[opener.text]
        if kind in (NodeKind.STRUCT, NodeKind.TABLE):
            if len(items) % 2 != 0:
                raise KorispSyntaxError(
                    "Map literal requires an even number of forms", opener.location
                )
            return Node(kind, dict(zip(items[::2], items[1::2])), opener.location)
        return Node(kind, items, opener.location)

    @staticmethod
    def _parse_string(token: Token) -> Node:
        text = token.text
        if text.startswith("@"):
            return Node.buffer(unescape(text[2:-1], token.location), token.location)
        return Node.string(unescape(text[1:-1], token.location), token.location)

    def parse_all(self) -> Iterator[Node]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse_atom(token: Token) -> Node:
    text = token.text
    if text in LITERALS:
        return Node(LITERALS[text], None, token.location)
    if NUMBER_RE.fullmatch(text):
        return Node.number(float(text), token.location)
    if text.startswith(":") and len(text) > 1:
        return Node.keyword(text[1:], token.location)
    return Node.symbol(text, token.location)


def parse(source: str) -> Node:
    """Parse a whole program into a MAIN node."""
    nodes = list(TokenStream(lex(source)).parse_all())
    return Node(NodeKind.MAIN, nodes, Location(1, 1))
