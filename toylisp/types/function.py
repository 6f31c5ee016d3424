"""Function values: builtins, named functions and anonymous closures.

The two user-level kinds differ only in how they hold on to the scope they
were defined in:

- ``Closure`` keeps a strong reference, so a closure returned out of a
  function activation keeps that activation's scope alive.
- ``UserDefined`` keeps a ``weakref.ref``. A named function stored in its own
  defining scope therefore never forms a reference cycle with it, and once
  the block that created the scope has finished the function can no longer be
  called (``scope()`` returns None).
"""

from __future__ import annotations

import weakref
from io import StringIO
from typing import TYPE_CHECKING, Callable, Union

from toylisp import Term
from toylisp.types.symbol import Symbol
from toylisp.types.term import render

if TYPE_CHECKING:
    from toylisp.types.environment import Environment


def _write_signature(buffer: StringIO, params: list[Symbol], body: Term) -> None:
    buffer.write("(")
    buffer.write(" ".join(str(p) for p in params))
    buffer.write(") ")
    buffer.write(render(body))


class Builtin:
    """A native operation over already-evaluated arguments."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: Callable[[list[Term]], Term]):
        self.name = name
        self.fn = fn

    def __call__(self, args: list[Term]) -> Term:
        return self.fn(args)

    def __str__(self) -> str:
        return "<builtin>"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"


class UserDefined:
    """A function created by ``defn``, holding a weak handle on its scope."""

    __slots__ = ("name", "params", "body", "_scope")

    def __init__(
        self, name: Symbol, params: list[Symbol], body: Term, scope: Environment
    ):
        self.name: Symbol = name
        self.params: list[Symbol] = params
        self.body: Term = body
        self._scope: weakref.ref[Environment] = weakref.ref(scope)

    def scope(self) -> Environment | None:
        """Resolve the defining scope, or None if it has been reclaimed."""
        return self._scope()

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"(defn {self.name} ")
            _write_signature(buffer, self.params, self.body)
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)


class Closure:
    """A function created by ``fn``, sharing ownership of its scope."""

    __slots__ = ("params", "body", "scope")

    def __init__(self, params: list[Symbol], body: Term, scope: Environment):
        self.params: list[Symbol] = params
        self.body: Term = body
        self.scope: Environment = scope

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(fn ")
            _write_signature(buffer, self.params, self.body)
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)


Function = Union[Builtin, UserDefined, Closure]
FUNCTION_TYPES = (Builtin, UserDefined, Closure)
