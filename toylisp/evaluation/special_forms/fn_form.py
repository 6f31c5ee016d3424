from toylisp import EvaluatorFn
from toylisp import Term
from toylisp.errors import ToyLispFormError
from toylisp.evaluation.special_forms.params import parse_params
from toylisp.types.environment import Environment
from toylisp.types.function import Closure


def fn_form(
    tail: list[Term],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Term:
    # (fn (params...) body) -- anonymous, never bound to a name here
    if len(tail) != 2:
        raise ToyLispFormError("expected 2 sub-expressions for the FN expression")

    params, body = tail
    return Closure(parse_params(params), body, env)
