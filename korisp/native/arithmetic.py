"""Arithmetic natives. Numbers are IEEE-754 doubles throughout, so division
by zero yields inf or nan instead of raising."""

from __future__ import annotations

import math
from functools import reduce
from operator import add, mul, sub

from korisp.native.module import NativeModule
from korisp.types.arguments import Arguments
from korisp.types.location import Location
from korisp.types.node import Node


def divide(lhs: float, rhs: float) -> float:
    if rhs == 0:
        if lhs == 0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)
    return lhs / rhs


def remainder(lhs: float, rhs: float) -> float:
    try:
        return math.fmod(lhs, rhs)
    except ValueError:
        # fmod raises for a zero divisor or an infinite dividend
        return math.nan


def _fold(op):
    def impl(location: Location, interpreter, arguments: Arguments) -> Node:
        return Node.number(reduce(op, arguments.unwrap_numbers()), location)

    return impl


def modulo(location: Location, interpreter, arguments: Arguments) -> Node:
    lhs, rhs = arguments.unwrap_numbers()
    return Node.number(remainder(lhs, rhs), location)


def increment(location: Location, interpreter, arguments: Arguments) -> Node:
    return Node.number(arguments.unwrap_number(0) + 1, location)


def decrement(location: Location, interpreter, arguments: Arguments) -> Node:
    return Node.number(arguments.unwrap_number(0) - 1, location)


BINARY = "n:number & m:number"

MODULE = NativeModule(
    "arithmetic",
    functions=[
        ("+", _fold(add), BINARY),
        ("-", _fold(sub), BINARY),
        ("*", _fold(mul), BINARY),
        ("/", _fold(divide), BINARY),
        ("%", modulo, "n:number m:number"),
        ("++", increment, "n:number"),
        ("--", decrement, "n:number"),
    ],
    core=True,
)
