from toylisp import EvaluatorFn
from toylisp import Term
from toylisp.errors import ToyLispFormError, ToyLispTypeError
from toylisp.types.environment import Environment
from toylisp.types.term import is_bool


def if_form(
    tail: list[Term],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Term:
    if len(tail) != 3:
        raise ToyLispFormError("expected 3 sub-expressions for the IF expression")

    test, consequent, alternative = tail
    cond = evaluate_fn(test, env)
    # No truthiness: only booleans are accepted
    if not is_bool(cond):
        raise ToyLispTypeError("expected a bool value for the IF test expression")

    if cond:
        return evaluate_fn(consequent, env)
    return evaluate_fn(alternative, env)
