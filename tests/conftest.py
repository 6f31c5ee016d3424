import pytest

from toylisp.interpreter import Interpreter, evaluate_program
from toylisp.types import Environment, render


@pytest.fixture
def env():
    """Fresh global environment with builtins loaded."""
    return Environment.new_global()


@pytest.fixture
def interp():
    """Interpreter whose global scope persists across eval calls."""
    return Interpreter()


@pytest.fixture
def run():
    """Evaluate a whole program in a fresh global scope and render the result.

    Comparing rendered text keeps 1 and true apart (True == 1 in Python).
    """
    def _run(source: str) -> str:
        return render(evaluate_program(source))
    return _run
