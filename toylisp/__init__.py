# Core type aliases for the toylisp data model.
# Terms are plain Python values (int, bool, list) plus Symbol and the three
# function classes in toylisp.types.function. The same values are used for
# parsed forms, runtime values and environment records.

from typing import Any, Callable

__version__ = "0.3.0"

# Runtime value / syntax node alias
Term = Any

# Evaluator function type: passed into special forms so they can recurse
EvaluatorFn = Callable[..., Term]
