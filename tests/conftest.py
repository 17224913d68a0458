import io

import pytest

from korisp.evaluation.interpreter import Interpreter


@pytest.fixture
def output():
    """Captures everything the interpreter prints."""
    return io.StringIO()


@pytest.fixture
def interpreter(output):
    return Interpreter(output=output, input=io.StringIO())


@pytest.fixture
def run(interpreter):
    """Evaluate a source string in the shared interpreter and return the Node."""

    def _run(source: str):
        return interpreter.interpret(source)

    return _run
