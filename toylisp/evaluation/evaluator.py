"""Core evaluator for the toylisp interpreter.

A plain recursive reduction of a term against an environment. There is no
trampoline and no depth limit: runaway recursion surfaces as Python's
RecursionError, which is not turned into a ToyLispError.
"""

from __future__ import annotations

from toylisp import Term
from toylisp.errors import (
    ToyLispError,
    ToyLispFormError,
    ToyLispTypeError,
    ToyLispUnboundSymbol,
)
from toylisp.evaluation.apply import apply, is_function
from toylisp.evaluation.special_forms import SPECIAL_FORMS
from toylisp.types.environment import Environment
from toylisp.types.symbol import Symbol


def evaluate(expr: Term, env: Environment) -> Term:
    """Reduce `expr` to a value in `env`."""
    match expr:
        case Symbol():
            value = env.lookup(expr)
            if value is None:
                raise ToyLispUnboundSymbol(f"identifier not found: {expr}")
            return value

        # Atoms (bool is a subclass of int)
        case int():
            return expr

        case []:
            raise ToyLispFormError("empty list cannot be evaluated")

        case [head, *tail_args]:
            # --- Special forms handling ---
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](tail_args, env, evaluate)

            # Function position may be any expression, e.g. ((fn (x) x) 1)
            fn = evaluate(head, env)
            if not is_function(fn):
                raise ToyLispTypeError("expected a function")
            args = [evaluate(arg, env) for arg in tail_args]
            return apply(fn, args, evaluate)

    raise ToyLispError("unsupported object")
