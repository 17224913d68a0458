"""Tokenizer for Korisp source text.

Tokens carry the 1-based line and column they start at. Whitespace and `#`
comments are dropped here, so the parser only ever sees meaningful tokens.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, NamedTuple

from korisp.config import debug_tokens
from korisp.errors import KorispSyntaxError
from korisp.types.location import Location

logger = logging.getLogger(__name__)

TOKEN_RE = re.compile(
    r"(?P<whitespace>\s+)"
    r"|(?P<comment>\#[^\n]*)"  # comment to end of line
    r"|(?P<open>@\(|@\[|@\{|\(|\[|\{)"  # ( [ { and their @ variants
    r"|(?P<close>[)\]}])"
    r'|(?P<string>@?"(?:\\.|[^\\"])*")'  # string or @"buffer"
    r'|(?P<unterminated>@?")'
    r"|(?P<reader_macro>['~;,|])"  # quote quasiquote splice unquote short-fn
    # `|` only starts short-fn at token start; inside an atom it joins union types
    r'|(?P<atom>[^\s()\[\]{}"\'~;,|\#][^\s()\[\]{}"\'~;,\#]*)',
)

NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

CLOSERS = {"(": ")", "[": "]", "{": "}", "@(": ")", "@[": "]", "@{": "}"}


class Token(NamedTuple):
    kind: str
    text: str
    location: Location


def lex(source: str) -> Iterator[Token]:
    """Yield the tokens of `source`; raises KorispSyntaxError on bad input."""
    trace = debug_tokens()
    pos = 0
    line = 1
    line_start = 0
    n = len(source)
    while pos < n:
        match = TOKEN_RE.match(source, pos)
        location = Location(line, pos - line_start + 1)
        if match is None:
            raise KorispSyntaxError(f"Unexpected character {source[pos]!r}", location)
        kind = match.lastgroup
        text = match.group()
        if kind == "unterminated":
            raise KorispSyntaxError("Unterminated string", location)

        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = match.start() + text.rindex("\n") + 1
        pos = match.end()

        if kind in ("whitespace", "comment"):
            continue
        token = Token(kind, text, location)
        if trace:
            logger.debug("token %s %s %r", location, kind, text)
        yield token
