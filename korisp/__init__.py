# Core type aliases for Korisp.
#
# A single Node class represents both parsed code and evaluated runtime values,
# so there is no separate Value type. The aliases below only name the shapes of
# the Python callables that native modules register.
#
# Naming guidance:
# - NativeImpl:     (location, interpreter, arguments) -> Node, used by both
#                   native functions and native macros.
# - SpecialFormImpl: (location, interpreter, nodes) -> Node, used by the
#                   evaluator-level forms in korisp.evaluation.special_forms.

from typing import Any, Callable

NativeImpl = Callable[..., Any]
SpecialFormImpl = Callable[..., Any]

__version__ = "0.1.0"
