from __future__ import annotations

import re

from korisp.errors import KorispValueError
from korisp.native.module import NativeModule
from korisp.reader.lexer import NUMBER_RE
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node, format_number

SPECIAL_NUMBER_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

MAX_ALIGN_WIDTH = 1 << 16


def parse(location: Location, interpreter, arguments: Arguments) -> Node:
    text = arguments.unwrap_string(0)
    stripped = text.strip()
    if not (NUMBER_RE.fullmatch(stripped) or SPECIAL_NUMBER_RE.fullmatch(stripped)):
        raise KorispValueError(f"Unable to parse '{text}' as a number")
    return Node.number(float(stripped), location)


def align(location: Location, interpreter, arguments: Arguments) -> Node:
    """(number/align 3 7) -> "007"; the width must be an integer in 0..65536."""
    width = arguments.unwrap_number(0)
    value = arguments.unwrap_number(1)
    if not width.is_integer() or width < 0:
        raise KorispValueError(f"'{format_number(width)}' is not a valid integer")
    if width > MAX_ALIGN_WIDTH:
        raise KorispValueError(
            f"Alignment width {format_number(width)} exceeds {MAX_ALIGN_WIDTH}"
        )
    return Node.string(format_number(value).rjust(int(width), "0"), location)


MODULE = NativeModule(
    "number",
    functions=[
        ("parse", parse, "s:string"),
        ("align", align, "width:number n:number"),
    ],
)
