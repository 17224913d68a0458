"""Native modules and construction of the root Environment.

Core modules (core, arithmetic, boolean) are merged flat into the root scope.
Every other module is bound once under its own name as a MODULE node, so its
members are reached as `list/map`, `string/join` and so on.
"""

from __future__ import annotations

import logging
from typing import Iterable

from korisp.errors import KorispDuplicateDefinition
from korisp.native.module import NativeModule
from korisp.native import arithmetic, boolean, core, debug, fs, lists, numbers, stdio, strings
from korisp.types.environment import Environment
from korisp.types.node import Node

logger = logging.getLogger(__name__)

MODULES: tuple[NativeModule, ...] = (
    core.MODULE,
    arithmetic.MODULE,
    boolean.MODULE,
    lists.MODULE,
    strings.MODULE,
    numbers.MODULE,
    fs.MODULE,
    stdio.MODULE,
    debug.MODULE,
)


def build_root_environment(modules: Iterable[NativeModule] | None = None) -> Environment:
    """Build a new root Environment from `modules` (default: MODULES).

    A name collision between modules is a bug in the module tables, so it is
    raised as a RuntimeError rather than a user-facing KorispError.
    """
    environment = Environment(name="root")
    for module in MODULES if modules is None else modules:
        try:
            if module.is_core_module():
                environment.merge(module.environment())
            else:
                environment.define(module.name, Node.module(module.environment()))
        except KorispDuplicateDefinition as error:
            raise RuntimeError(f"Unable to register '{module.name}' module: {error}") from error
        logger.debug("registered %r", module)
    return environment


__all__ = ["MODULES", "NativeModule", "build_root_environment"]
