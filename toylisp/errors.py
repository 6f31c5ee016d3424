class ToyLispError(Exception):
    """ Base class for all toylisp errors, carries a human-readable message"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ToyLispSyntaxError(ToyLispError):
    """ Raised when the source text cannot be read into a single form"""

class ToyLispInvalidSymbol(ToyLispError):
    """ Raised when something other than a Symbol is used as a name"""

class ToyLispUnboundSymbol(ToyLispError):
    """ Raised when a symbol is used before it is bound"""

class ToyLispDuplicateSymbol(ToyLispError):
    """ Raised when a name is defined twice in the same scope"""

class ToyLispFormError(ToyLispError):
    """ Raised for a malformed special form or an empty list"""

class ToyLispTypeError(ToyLispError):
    """ Raised when an operand or sub-form has the wrong kind"""

class ToyLispArityError(ToyLispError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class ToyLispScopeError(ToyLispError):
    """ Raised when a named function's defining scope has been reclaimed"""

class ToyLispArithmeticError(ToyLispError):
    """ Raised on division by zero or 64-bit integer overflow"""
