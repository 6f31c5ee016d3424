"""Helpers shared by every kind of term.

A term is one of: Symbol, bool, int (signed 64-bit), list of terms, or one of
the function objects in toylisp.types.function. Since ``bool`` is a subclass
of ``int`` in Python, kind checks must go through ``is_number``/``is_bool``.
"""

from __future__ import annotations

from toylisp import Term
from toylisp.types.symbol import Symbol

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def is_bool(term: Term) -> bool:
    return isinstance(term, bool)


def is_number(term: Term) -> bool:
    return isinstance(term, int) and not isinstance(term, bool)


def in_int64_range(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def render(term: Term) -> str:
    """Canonical text form of a term, as printed by the REPL.

    Functions render through their own ``__str__``.
    """
    if isinstance(term, bool):
        return "true" if term else "false"
    if isinstance(term, (int, Symbol)):
        return str(term)
    if isinstance(term, list):
        return "(" + " ".join(render(t) for t in term) + ")"
    return str(term)
