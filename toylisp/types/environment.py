"""Runtime environment for toylisp.

An Environment stores bindings of Symbols to terms and links to an enclosing
scope through ``outer``, forming a chain rooted at the global environment.
Definitions only ever touch the local frame: shadowing an outer binding is
allowed, redefining a local one is an error.

Scope lifetime is reference counting. Call frames, child scopes and closures
hold strong references; named functions hold weak ones (see
toylisp.types.function), which is why the class keeps a ``__weakref__`` slot.

The only way to build a reference cycle is to define a closure in a scope the
closure itself owns, directly or through other scopes. Such a scope is retained
by the root environment for as long as the root lives, so whether a named
function can still reach it never depends on when the cycle collector runs.
"""

from __future__ import annotations

from io import StringIO
from typing import Mapping, Optional

from toylisp import Term
from toylisp.errors import ToyLispDuplicateSymbol, ToyLispInvalidSymbol
from toylisp.types.function import Closure
from toylisp.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to terms."""

    __slots__ = ("vars", "outer", "retained", "__weakref__")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, Term] = {}
        self.outer: Environment | None = outer
        # scopes caught in closure cycles, only populated on the root
        self.retained: set[Environment] = set()

    @classmethod
    def with_records(
        cls, records: Mapping[Symbol, Term], outer: Optional[Environment] = None
    ) -> Environment:
        """Create a frame pre-populated with `records`, used for call arguments."""
        env = cls(outer)
        for name in records:
            if not isinstance(name, Symbol):
                raise ToyLispInvalidSymbol(f"Cannot define {name} as a symbol")
        env.vars.update(records)
        return env

    @classmethod
    def new_global(cls) -> Environment:
        """Create the parent-less root environment with the builtins installed."""
        from toylisp.builtins import register

        env = cls()
        register(env)
        return env

    def define(self, name: Symbol, value: Term) -> None:
        """Bind `name` to `value` in this frame.

        Raises ToyLispInvalidSymbol if `name` is not a Symbol and
        ToyLispDuplicateSymbol if this frame already binds it.
        """
        if not isinstance(name, Symbol):
            raise ToyLispInvalidSymbol(f"Cannot define {name} as a symbol")
        if name in self.vars:
            raise ToyLispDuplicateSymbol(f"identifier already exists: {name}")
        self.vars[name] = value
        if self.is_owned_by(value):
            root = self.root()
            if root is not self:
                root.retained.add(self)

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def is_owned_by(self, value: Term) -> bool:
        """True if `value` keeps this frame alive through closure scopes,
        outer links and closures bound in those scopes."""
        if not isinstance(value, Closure):
            return False
        seen: set[int] = set()
        pending = [value.scope]
        while pending:
            env = pending.pop()
            if env is self:
                return True
            if id(env) in seen:
                continue
            seen.add(id(env))
            if env.outer is not None:
                pending.append(env.outer)
            pending.extend(v.scope for v in env.vars.values() if isinstance(v, Closure))
        return False

    def find(self, name: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol) -> Optional[Term]:
        """Value bound to `name` here or in an enclosing scope, else None."""
        env = self.find(name)
        if env is None:
            return None
        return env.vars[name]

    def __contains__(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as frame:
                env._write_vars(frame)
                chain.append(frame.getvalue())
            env = env.outer
        return "<Environment chain: " + " -> ".join(chain) + ">"
