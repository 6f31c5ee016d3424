from toylisp import Term
from toylisp.errors import ToyLispTypeError
from toylisp.types.symbol import Symbol


def parse_params(form: Term) -> list[Symbol]:
    """Validate a `(p1 p2 ...)` parameter list shared by defn and fn."""
    if not isinstance(form, list):
        raise ToyLispTypeError("expected parameter name list")
    if not all(isinstance(p, Symbol) for p in form):
        raise ToyLispTypeError("parameter name should be a symbol")
    return list(form)
