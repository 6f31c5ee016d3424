"""Application engine for toylisp.

All three function kinds are invoked here, from the single call site in the
evaluator:

- Builtin: called directly with the evaluated arguments.
- UserDefined: the weakly held defining scope is resolved on every call; if it
  has been reclaimed the call fails instead of extending its lifetime.
- Closure: the owned defining scope is always available.

For user functions the arguments are bound in a fresh frame whose outer scope
is the defining scope, and the body is evaluated there.
"""

from __future__ import annotations

import logging

from toylisp import EvaluatorFn, Term
from toylisp.errors import ToyLispArityError, ToyLispScopeError, ToyLispTypeError
from toylisp.types.environment import Environment
from toylisp.types.function import FUNCTION_TYPES, Builtin, Closure, UserDefined
from toylisp.types.symbol import Symbol

logger = logging.getLogger(__name__)


def is_function(term: Term) -> bool:
    return isinstance(term, FUNCTION_TYPES)


def check_arity(params: list[Symbol], args: list[Term]) -> None:
    if len(args) != len(params):
        raise ToyLispArityError(
            f"args length error: expected {len(params)}, got {len(args)}"
        )


def bind_arguments(
    params: list[Symbol], args: list[Term], defining_env: Environment
) -> Environment:
    """Return the activation frame for a call: params bound over `defining_env`."""
    return Environment.with_records(dict(zip(params, args)), defining_env)


def apply(head: Term, args: list[Term], evaluate_fn: EvaluatorFn) -> Term:
    """Apply an evaluated function value to evaluated arguments."""
    match head:
        case Builtin():
            return head(args)
        case UserDefined(params=params, body=body):
            check_arity(params, args)
            defining_env = head.scope()
            if defining_env is None:
                logger.debug("defining scope of %s has been reclaimed", head.name)
                raise ToyLispScopeError("static scope environment not found")
            return evaluate_fn(body, bind_arguments(params, args, defining_env))
        case Closure(params=params, body=body, scope=defining_env):
            check_arity(params, args)
            return evaluate_fn(body, bind_arguments(params, args, defining_env))
        case _:
            raise ToyLispTypeError("expected a function")
