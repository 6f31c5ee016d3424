from toylisp import EvaluatorFn
from toylisp import Term
from toylisp.errors import ToyLispFormError, ToyLispTypeError
from toylisp.evaluation.special_forms.params import parse_params
from toylisp.types.environment import Environment
from toylisp.types.function import UserDefined
from toylisp.types.symbol import Symbol


def defn_form(
    tail: list[Term],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Term:
    """
    (defn name (params...) body)
    Defines a named function in the current scope and returns it. The function
    only holds a weak reference to `env`, so it stops being callable once the
    scope it was defined in is gone.
    """
    if len(tail) != 3:
        raise ToyLispFormError("expected 3 sub-expressions for the DEFN expression")

    name, params, body = tail
    if not isinstance(name, Symbol):
        raise ToyLispTypeError("function name should be a symbol")

    fn = UserDefined(name, parse_params(params), body, env)
    env.define(name, fn)
    return fn
