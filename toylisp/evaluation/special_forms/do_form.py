from toylisp import EvaluatorFn
from toylisp import Term
from toylisp.errors import ToyLispFormError
from toylisp.types.environment import Environment


def do_form(
    tail: list[Term],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Term:
    """
    (do form1 form2 ... formN)
    Evaluates each form in a fresh child scope and returns the last result.
    The child scope is dropped on return unless a closure captured it.
    """
    if not tail:
        raise ToyLispFormError("sub-expressions are required in DO expression")

    block_env = Environment(outer=env)
    result: Term = None
    for expr in tail:
        result = evaluate_fn(expr, block_env)
    return result
