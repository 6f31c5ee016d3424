from __future__ import annotations
import sys


class Symbol:
    """An identifier or keyword reference such as ``add`` or ``defn``.

    Names are interned, so comparing and hashing symbols is cheap. A name must
    read back as a single atom: non-empty, without whitespace or parens.
    """

    __slots__ = ("name",)

    def __init__(self, name: str):
        if not name or any(c.isspace() or c in "()" for c in name):
            raise ValueError(f"not a valid symbol name: {name!r}")
        self.name = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.name is other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self):
        return f"Symbol({self.name!r})"

    def __str__(self):
        return self.name
