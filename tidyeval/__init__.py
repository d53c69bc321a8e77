# Core type aliases for the tidyeval data model.
# Literals are plain Python values (int, float, str, bool, None, numpy arrays, ...).
# Symbols, Call nodes and Quosures are the only structured forms.
#
# Naming guidance:
# - SExpression: syntactic forms (code-as-data) handed to the evaluator.
# - LispValue:  evaluated runtime values.
# Both aliases resolve to `Any` and are interchangeable.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Forms alias (often used interchangeably with LispValue)
SExpression = LispValue

# Evaluator function type: Python evaluator used inside special forms
EvaluatorFn = Callable[..., LispValue]
