from toylisp import EvaluatorFn
from toylisp import Term
from toylisp.errors import ToyLispFormError, ToyLispTypeError
from toylisp.types.environment import Environment
from toylisp.types.symbol import Symbol


def let_form(
    tail: list[Term],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Term:
    """
    (let name value)
    Binds in the current scope and returns the bound value.
    """
    if len(tail) != 2:
        raise ToyLispFormError("expected 2 sub-expressions for the LET expression")

    name, val_expr = tail
    if not isinstance(name, Symbol):
        raise ToyLispTypeError("the identifier should be a symbol")

    value = evaluate_fn(val_expr, env)
    env.define(name, value)
    return value
