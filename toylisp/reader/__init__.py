from toylisp.reader.parser import lex, parse_atom, parse_program, TokenStream

__all__ = ["lex", "parse_atom", "parse_program", "TokenStream"]
