"""Exception taxonomy for Korisp.

Every error that user source can trigger derives from KorispError and may carry
the Location of the call that first observed it. KorispInternalError is kept
outside that hierarchy: it signals a bug in a native module, never bad input.
"""

from __future__ import annotations

from typing import Any


class KorispError(Exception):
    """Base class for all Korisp errors"""

    def __init__(self, message: str, location: Any = None):
        super().__init__(message)
        self.message = message
        self.location = location

    def attach_location(self, location: Any) -> KorispError:
        """Stamp `location` unless a deeper frame already did."""
        if self.location is None:
            self.location = location
        return self

    def __str__(self) -> str:
        return self.message


class KorispArityError(KorispError):
    """Raised when the number of arguments passed to a callable is incorrect"""

    def __init__(self, expected: Any, actual: int, location: Any = None):
        super().__init__(
            f"Expected {expected.describe()} parameters, found {actual}.", location
        )
        self.expected = expected
        self.actual = actual


class KorispTypeError(KorispError):
    """Raised when the types of values passed to an operation are incorrect"""


class InvalidNodeArgument(KorispTypeError):
    """Raised when an argument's variant is not in the parameter's accepted set"""

    def __init__(self, expected: tuple, actual: Any, location: Any = None):
        names = "|".join(str(t) for t in expected) or "any"
        super().__init__(f"Invalid argument '{actual}', expected '{names}'", location)
        self.expected = tuple(expected)
        self.actual = actual


class KorispInvalidOperation(KorispTypeError):
    """Raised when an operator is applied to operands it does not support"""

    def __init__(self, op: str, lhs: Any, rhs: Any, location: Any = None):
        super().__init__(f"Unable to {op} {lhs} and {rhs}", location)
        self.op = op
        self.lhs = lhs
        self.rhs = rhs


class KorispNotCallable(KorispError):
    """Raised when the head of a call expression is not a callable"""

    def __init__(self, value: Any, location: Any = None):
        super().__init__(f"'{value}' is not callable", location)
        self.value = value


class KorispUndefinedSymbol(KorispError):
    """Raised when a symbol is used before it is bound"""

    def __init__(self, name: str, location: Any = None):
        super().__init__(f"Undefined symbol '{name}'", location)
        self.name = name


class KorispDuplicateDefinition(KorispError):
    """Raised when a name is defined twice in one scope frame"""

    def __init__(self, name: str, location: Any = None):
        super().__init__(f"Already defined symbol '{name}'", location)
        self.name = name


class KorispImmutableBinding(KorispError):
    """Raised when `set` targets a binding created with `def`"""

    def __init__(self, name: str, location: Any = None):
        super().__init__(f"Cannot set immutable symbol '{name}'", location)
        self.name = name


class KorispContractError(KorispError):
    """Raised for malformed parameter contracts (a native-module author bug)"""


class NonLastParameterIsRest(KorispContractError):
    def __init__(self, location: Any = None):
        super().__init__("Only the last parameter may be a rest parameter", location)


class RequiredParameterAfterOptional(KorispContractError):
    def __init__(self, location: Any = None):
        super().__init__("Required parameter follows an optional parameter", location)


class InvalidParameterType(KorispContractError):
    def __init__(self, type_name: str, location: Any = None):
        super().__init__(f"Invalid parameter type '{type_name}'", location)
        self.type_name = type_name


class KorispValueError(KorispError):
    """Raised when a value has the right type but cannot be used"""


class KorispIOError(KorispError):
    """Wraps an OSError or decoding error raised by a native I/O function"""

    def __init__(self, source: OSError | UnicodeDecodeError, location: Any = None):
        super().__init__(str(source), location)
        self.source = source


class KorispSyntaxError(KorispError):
    """Raised by the reader on malformed source text"""


class KorispInternalError(RuntimeError):
    """Raised when a native implementation breaks its own declared contract"""
