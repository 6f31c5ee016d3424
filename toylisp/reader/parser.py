"""
  toylisp Reader: lexer and parser

- Parens are always tokens of their own; every other run of non-whitespace,
  non-paren characters is an atom.
- Emits Python primitives, the same values the evaluator works on:

    - true / false -> bool
    - base-10 integers within the signed 64-bit range -> int
    - anything else -> Symbol
    - lists -> Python list
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from toylisp import Term
from toylisp.errors import ToyLispSyntaxError
from toylisp.types.symbol import Symbol
from toylisp.types.term import in_int64_range


TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<atom>[^\s()]+)"  # everything else up to whitespace or a paren
    r")"
)

INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            # only trailing whitespace is left
            break
        pos = m.end()
        yield m.lastgroup, m.group(m.lastgroup)


def parse_atom(token: str) -> Term:
    if token == "true":
        return True
    if token == "false":
        return False
    if INTEGER_RE.fullmatch(token):
        value = int(token)
        if in_int64_range(value):
            return value
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterable[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def at_end(self) -> bool:
        return self.peek()[0] is None

    def parse_expr(self) -> Term:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise ToyLispSyntaxError("required at least one token")
        if tok_type == "rparen":
            raise ToyLispSyntaxError("unexpected right paren")
        if tok_type == "atom":
            return parse_atom(tok_val)

        items: list[Term] = []
        while True:
            next_type, _ = self.peek()
            if next_type is None:
                raise ToyLispSyntaxError("missing right paren")
            if next_type == "rparen":
                self.advance()
                return items
            items.append(self.parse_expr())


def parse_program(source: str) -> Term:
    """Read exactly one form from `source`; leftover tokens are an error."""
    stream = TokenStream(lex(source))
    expr = stream.parse_expr()
    if not stream.at_end():
        raise ToyLispSyntaxError("invalid expression")
    return expr
