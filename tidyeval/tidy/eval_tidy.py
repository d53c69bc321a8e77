"""Entry points for tidy evaluation.

`eval_tidy` evaluates an expression (or each of a list of expressions) with
optional overlay data in scope: names in `data` mask the lexical environment,
quosures anywhere in the expression evaluate in their own environment, and the
`.data` and `.env` pronouns are available. `eval_tidy_` does the same over a
dynamic scope supplied by the caller.

Each call builds a fresh overscope and cleans it up on every exit path.
"""

from __future__ import annotations

from typing import Optional

from tidyeval import LispValue, SExpression
from tidyeval.runtime_context import global_env
from tidyeval.tidy.overscope import (
    as_overscope,
    new_overscope,
    overscope_clean,
    overscope_eval_next,
)
from tidyeval.types.environment import Environment
from tidyeval.types.quosure import Quosure, new_quosure


def eval_tidy(
    expr: SExpression | list[SExpression],
    data=None,
    env: Optional[Environment] = None,
) -> LispValue | list[LispValue]:
    """Evaluate `expr` tidily.

    - expr: an expression or quosure; a list (or tuple) of them is evaluated
      element-wise and a list of results is returned in the same order.
    - data: None, a mapping, an Environment or a numpy structured array. Its
      named entries take precedence over the lexical environment.
    - env: environment used to capture `expr` when it is not already a
      quosure (default: the global environment).
    """
    if isinstance(expr, (list, tuple)):
        return [eval_tidy(e, data, env) for e in expr]

    env = env if env is not None else global_env()
    if not isinstance(expr, Quosure):
        expr = new_quosure(expr, env)

    overscope = as_overscope(expr, data)
    try:
        return overscope_eval_next(overscope, expr)
    finally:
        overscope_clean(overscope)


def eval_tidy_(
    expr: SExpression,
    bottom: Environment,
    top: Optional[Environment] = None,
    env: Optional[Environment] = None,
) -> LispValue:
    """Evaluate `expr` tidily in a caller-built dynamic scope.

    `bottom` is the innermost frame of the scope and `top` (default: `bottom`)
    its outermost one, whose parent is rechained to each quosure's
    environment. All bindings from `bottom` up to `top` are removed afterwards.
    """
    env = env if env is not None else global_env()
    overscope = new_overscope(bottom, top)
    try:
        if not isinstance(expr, Quosure):
            expr = new_quosure(expr, env)
        return overscope_eval_next(overscope, expr)
    finally:
        overscope_clean(overscope)
