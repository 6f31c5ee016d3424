"""Builtin operations installed into the global environment.

Every builtin takes the list of evaluated arguments, validates the argument
count and kinds before computing, and raises a ToyLispError otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from toylisp import Term
from toylisp.errors import ToyLispArityError, ToyLispTypeError, ToyLispArithmeticError
from toylisp.types.function import Builtin
from toylisp.types.symbol import Symbol
from toylisp.types.term import is_bool, is_number, in_int64_range

if TYPE_CHECKING:
    from toylisp.types.environment import Environment


# -------------------------------
# Operand validation
# -------------------------------
def _require(args: list[Term], count: int) -> None:
    if len(args) != count:
        raise ToyLispArityError(f"required {count} arguments")

def _number(term: Term) -> int:
    if not is_number(term):
        raise ToyLispTypeError("the object is not a number")
    return term

def _boolean(term: Term) -> bool:
    if not is_bool(term):
        raise ToyLispTypeError("the object is not a boolean")
    return term

def number_pair(args: list[Term]) -> tuple[int, int]:
    _require(args, 2)
    return _number(args[0]), _number(args[1])

def bool_pair(args: list[Term]) -> tuple[bool, bool]:
    _require(args, 2)
    return _boolean(args[0]), _boolean(args[1])

def _checked(value: int) -> int:
    if not in_int64_range(value):
        raise ToyLispArithmeticError("integer overflow")
    return value

# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[Term]) -> int:
    left, right = number_pair(args)
    return _checked(left + right)

def sub(args: list[Term]) -> int:
    left, right = number_pair(args)
    return _checked(left - right)

def mul(args: list[Term]) -> int:
    left, right = number_pair(args)
    return _checked(left * right)

def div(args: list[Term]) -> int:
    left, right = number_pair(args)
    if right == 0:
        raise ToyLispArithmeticError("division by zero")
    # Truncate toward zero; Python's // floors.
    quotient = abs(left) // abs(right)
    if (left < 0) != (right < 0):
        quotient = -quotient
    return _checked(quotient)

# -------------------------------
# Comparison
# -------------------------------
def gt(args: list[Term]) -> bool:
    left, right = number_pair(args)
    return left > right

def gte(args: list[Term]) -> bool:
    left, right = number_pair(args)
    return left >= right

def lt(args: list[Term]) -> bool:
    left, right = number_pair(args)
    return left < right

def lte(args: list[Term]) -> bool:
    left, right = number_pair(args)
    return left <= right

# -------------------------------
# Equality
# -------------------------------
def equals(args: list[Term]) -> bool:
    try:
        left, right = number_pair(args)
    except (ToyLispArityError, ToyLispTypeError):
        left, right = bool_pair(args)
    return left == right

def not_equals(args: list[Term]) -> bool:
    return not equals(args)

# -------------------------------
# Boolean logic
# -------------------------------
def logical_and(args: list[Term]) -> bool:
    left, right = bool_pair(args)
    return left and right

def logical_or(args: list[Term]) -> bool:
    left, right = bool_pair(args)
    return left or right

def logical_not(args: list[Term]) -> bool:
    _require(args, 1)
    return not _boolean(args[0])

# -------------------------------
# Registration
# -------------------------------
BUILTINS = {
    "add": add,
    "sub": sub,
    "mul": mul,
    "div": div,
    "gt": gt,
    "gte": gte,
    "lt": lt,
    "lte": lte,
    "eq": equals,
    "neq": not_equals,
    "and": logical_and,
    "or": logical_or,
    "not": logical_not,
}

def register(env: Environment) -> None:
    for name, fn in BUILTINS.items():
        env.define(Symbol(name), Builtin(name, fn))
