"""Quosures: an expression bundled with the environment it was captured in.

Within an overscope a quosure behaves like a reified promise: when the
evaluator reaches it, it evaluates its own expression in its own environment,
chained under the overscoped data. Elsewhere it is an inert value.
"""

from __future__ import annotations

from typing import Optional

from tidyeval import SExpression
from tidyeval.runtime_context import global_env
from tidyeval.types.call import Call, is_quote_marker_call
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyTypeError
from tidyeval.types.nil import MissingArg
from tidyeval.types.symbol import Symbol


class Quosure:
    """Immutable (expr, env) pair. `env` is None for an unscoped quosure."""

    __slots__ = ("expr", "env")

    def __init__(self, expr: SExpression, env: Optional[Environment] = None):
        if env is not None and not isinstance(env, Environment):
            raise TidyTypeError(f"Quosure environment must be an Environment, got {env!r}")
        object.__setattr__(self, "expr", expr)
        object.__setattr__(self, "env", env)

    def __setattr__(self, key, value):
        raise AttributeError("Quosures are immutable; use quo_set_env/quo_set_expr")

    @property
    def is_scoped(self) -> bool:
        return self.env is not None

    @property
    def is_missing(self) -> bool:
        return self.expr is MissingArg

    def __str__(self) -> str:
        return f"^{self.expr}"

    def __repr__(self) -> str:
        env = "unscoped" if self.env is None else f"env={self.env!r}"
        return f"<quosure: {self.expr!r} {env}>"


def new_quosure(expr: SExpression, env: Optional[Environment] = None) -> Quosure:
    """Capture `expr` with `env`, defaulting to the global environment."""
    return Quosure(expr, env if env is not None else global_env())


def is_quosure(x) -> bool:
    return isinstance(x, Quosure)


def as_quosure(x, env: Optional[Environment] = None) -> Quosure:
    """Coerce `x` to a quosure.

    Quosures pass through unchanged. A literal `~expr` call is unwrapped to its
    argument. Anything else is captured with `env`.
    """
    if isinstance(x, Quosure):
        return x
    if is_quote_marker_call(x) and len(x.args) == 1:
        x = x.args[0][1]
    return Quosure(x, env)


def quo_get_expr(quo: Quosure) -> SExpression:
    return quo.expr


def quo_get_env(quo: Quosure) -> Optional[Environment]:
    return quo.env


def quo_set_env(quo: Quosure, env: Optional[Environment]) -> Quosure:
    return Quosure(quo.expr, env)


def quo_set_expr(quo: Quosure, expr: SExpression) -> Quosure:
    return Quosure(expr, quo.env)


def quo_is_missing(quo: Quosure) -> bool:
    return quo.expr is MissingArg


def quo_is_symbol(quo: Quosure) -> bool:
    return isinstance(quo.expr, Symbol)


def quo_is_call(quo: Quosure) -> bool:
    return isinstance(quo.expr, Call)
