from toylisp.types.symbol import Symbol
from toylisp.types.term import render, is_bool, is_number, INT64_MIN, INT64_MAX
from toylisp.types.environment import Environment
from toylisp.types.function import Builtin, UserDefined, Closure, Function

__all__ = [
    "Symbol",
    "render",
    "is_bool",
    "is_number",
    "INT64_MIN",
    "INT64_MAX",
    "Environment",
    "Builtin",
    "UserDefined",
    "Closure",
    "Function",
]
