from __future__ import annotations

from typing import List, Optional

from tidyeval import LispValue
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError
from tidyeval.types.symbol import Symbol

REST = Symbol("&rest")


def bind_arguments(
    formals: List[Symbol],
    supplied_args: List[LispValue],
    closure_env: Environment,
    named: Optional[dict[str, LispValue]] = None,
) -> Environment:
    """
    Single source of truth for lambda-list binding.

    Supports:
    - Named arguments, matched to formals by name before anything else
    - Positional required parameters, filled in order from what remains
    - &rest capturing remaining positional args as a list

    Returns a new Environment whose outer is the closure_env, populated with
    the bindings for evaluating the callee body.
    """
    formals = list(formals)
    supplied = list(supplied_args)
    named = dict(named or {})
    local_env = Environment(outer=closure_env)

    rest_name: Symbol | None = None
    if REST in formals:
        idx = formals.index(REST)
        if idx != len(formals) - 2:
            raise TidyArityError("Malformed parameter list: &rest must be followed by exactly one name")
        rest_name = formals[-1]
        formals = formals[:idx]

    # Named arguments first
    for f in list(formals):
        if f.id in named:
            local_env.define(f, named.pop(f.id))
            formals.remove(f)
    if named:
        raise TidyArityError(f"Unused named argument(s): {sorted(named)}")

    while formals:
        formal = formals.pop(0)
        if supplied:
            local_env.define(formal, supplied.pop(0))
        else:
            missing = [formal] + formals
            raise TidyArityError(
                f"Too few arguments; missing {len(missing)} parameter(s): {[str(s) for s in missing]}"
            )

    if rest_name is not None:
        local_env.define(rest_name, supplied)
    elif supplied:
        raise TidyArityError(f"Too many arguments: {supplied}")

    return local_env
