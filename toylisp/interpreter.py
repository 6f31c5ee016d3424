from __future__ import annotations

import logging

from toylisp import Term
from toylisp.evaluation.evaluator import evaluate
from toylisp.reader.parser import parse_program
from toylisp.types.environment import Environment

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates toylisp programs against one global environment.
    Definitions made at top level persist across calls to `eval`.
    """

    def __init__(self, env: Environment | None = None):
        self.env: Environment = env if env is not None else Environment.new_global()

    def eval(self, code: str) -> Term:
        """Parse exactly one form from `code` and evaluate it."""
        expr = parse_program(code)
        logger.debug("evaluating %r", expr)
        return evaluate(expr, self.env)


def evaluate_program(source: str) -> Term:
    """Evaluate `source` against a freshly constructed global environment."""
    return Interpreter().eval(source)
