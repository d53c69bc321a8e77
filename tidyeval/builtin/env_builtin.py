"""Built-in functions for the base environment.

Arithmetic, comparison, vector construction and summaries (numpy backed),
pronoun extraction, conditions, and quosure/environment introspection exposed
to evaluated code. Builtins use the `(env, args)` convention; `env` is the
environment the call was evaluated in.
"""
from __future__ import annotations

import operator
from functools import reduce

import numpy as np

from tidyeval import LispValue
from tidyeval.builtin.np_helpers import to_bool, to_list
from tidyeval.evaluation.apply import accepts_named
from tidyeval.types.dictionary import extract
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError, TidyError, TidyTypeError
from tidyeval.types.nil import MissingArg, Nil
from tidyeval.types.quosure import Quosure
from tidyeval.types.symbol import Symbol


def _fold(name, op, expr):
    try:
        return reduce(op, expr)
    except TypeError:
        raise TidyTypeError(f"All arguments to {name} must be numbers")


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, expr: list[LispValue]) -> LispValue:
    """Sum of all arguments; numpy arrays add element-wise."""
    if not expr:
        return 0
    return _fold("+", operator.add, expr)


def sub(env: Environment, expr: list[LispValue]) -> LispValue:
    """Subtract all subsequent arguments from the first; unary negation for one arg."""
    if not expr:
        raise TidyArityError("- requires at least 1 argument")
    if len(expr) == 1:
        try:
            return -expr[0]
        except TypeError:
            raise TidyTypeError("All arguments to - must be numbers")
    return _fold("-", operator.sub, expr)


def mul(env: Environment, expr: list[LispValue]) -> LispValue:
    """Product of all arguments."""
    if not expr:
        return 1
    return _fold("*", operator.mul, expr)


def div(env: Environment, expr: list[LispValue]) -> LispValue:
    """Divide left-to-right; with one arg returns reciprocal."""
    if not expr:
        raise TidyArityError("/ requires at least 1 argument")
    if len(expr) == 1:
        expr = [1, expr[0]]
    return _fold("/", operator.truediv, expr)


# -------------------------------
# Comparison and logic
# -------------------------------
def _compare(name, op):
    def compare(env: Environment, expr: list[LispValue]) -> LispValue:
        if len(expr) != 2:
            raise TidyArityError(f"{name} requires exactly 2 arguments")
        return op(expr[0], expr[1])
    compare.__name__ = name
    return compare


def logical_not(env: Environment, expr: list[LispValue]) -> LispValue:
    """Logical NOT; element-wise for numpy arrays."""
    if len(expr) != 1:
        raise TidyArityError("! requires exactly 1 argument")
    val = expr[0]
    if isinstance(val, np.ndarray):
        return np.logical_not(val)
    return not to_bool(val)


# -------------------------------
# Vectors and lists
# -------------------------------
@accepts_named
def list_builtin(env: Environment, expr: list[LispValue], named: dict) -> LispValue:
    """list(...) returns a Python list, or a dict when any argument is named.

    In the dict form, unnamed entries are keyed by their position.
    """
    if not named:
        return list(expr)
    out: dict = {i: v for i, v in enumerate(expr)}
    out.update(named)
    return out


def combine(env: Environment, expr: list[LispValue]) -> np.ndarray:
    """c(...) flattens its arguments into a single numpy vector."""
    flat: list = []
    for x in expr:
        flat.extend(to_list(x))
    return np.asarray(flat)


def length(env: Environment, expr: list[LispValue]) -> int:
    if len(expr) != 1:
        raise TidyArityError("length requires exactly 1 argument")
    x = expr[0]
    if x is Nil or x is None:
        return 0
    return len(to_list(x))


def sum_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    return np.sum(combine(env, expr))


def mean(env: Environment, expr: list[LispValue]) -> LispValue:
    if len(expr) != 1:
        raise TidyArityError("mean requires exactly 1 argument")
    return np.mean(expr[0])


def identity(env: Environment, expr: list[LispValue]) -> LispValue:
    if len(expr) != 1:
        raise TidyArityError("identity requires exactly 1 argument")
    return expr[0]


def extract2(env: Environment, expr: list[LispValue]) -> LispValue:
    """x[[name]]: name-based extraction from pronouns, environments and mappings."""
    if len(expr) != 2:
        raise TidyArityError("[[ requires exactly 2 arguments")
    obj, name = expr
    if isinstance(obj, (list, tuple)) and isinstance(name, int):
        return obj[name]
    return extract(obj, name)


def paste(env: Environment, expr: list[LispValue]) -> str:
    return " ".join(str(x) for x in expr)


# -------------------------------
# Conditions
# -------------------------------
def stop(env: Environment, expr: list[LispValue]) -> LispValue:
    """Raise a TidyError with the pasted arguments as message."""
    raise TidyError("".join(str(x) for x in expr))


# -------------------------------
# Environments and quosures
# -------------------------------
def current_env(env: Environment, expr: list[LispValue]) -> Environment:
    """environment() returns the environment the call was evaluated in."""
    if expr:
        raise TidyArityError("environment takes no arguments")
    return env


def missing_arg_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    return MissingArg


def is_quosure_builtin(env: Environment, expr: list[LispValue]) -> bool:
    if len(expr) != 1:
        raise TidyArityError("is_quosure requires exactly 1 argument")
    return isinstance(expr[0], Quosure)


def quo_get_env_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    if len(expr) != 1 or not isinstance(expr[0], Quosure):
        raise TidyTypeError("quo_get_env requires a single quosure")
    return expr[0].env if expr[0].env is not None else Nil


def quo_get_expr_builtin(env: Environment, expr: list[LispValue]) -> LispValue:
    if len(expr) != 1 or not isinstance(expr[0], Quosure):
        raise TidyTypeError("quo_get_expr requires a single quosure")
    return expr[0].expr


def register(env: Environment) -> None:
    """Register all builtin functions and constants into the given environment."""
    env.update(
        {
            Symbol("+"): add,
            Symbol("-"): sub,
            Symbol("*"): mul,
            Symbol("/"): div,
            Symbol("=="): _compare("==", operator.eq),
            Symbol("!="): _compare("!=", operator.ne),
            Symbol("<"): _compare("<", operator.lt),
            Symbol("<="): _compare("<=", operator.le),
            Symbol(">"): _compare(">", operator.gt),
            Symbol(">="): _compare(">=", operator.ge),
            Symbol("!"): logical_not,
            Symbol("not"): logical_not,
            Symbol("list"): list_builtin,
            Symbol("c"): combine,
            Symbol("length"): length,
            Symbol("sum"): sum_builtin,
            Symbol("mean"): mean,
            Symbol("identity"): identity,
            Symbol("[["): extract2,
            Symbol("paste"): paste,
            Symbol("stop"): stop,
            Symbol("environment"): current_env,
            Symbol("missing_arg"): missing_arg_builtin,
            Symbol("is_quosure"): is_quosure_builtin,
            Symbol("quo_get_env"): quo_get_env_builtin,
            Symbol("quo_get_expr"): quo_get_expr_builtin,
        }
    )
    env.define(Symbol("TRUE"), True)
    env.define(Symbol("FALSE"), False)
    env.define(Symbol("NULL"), None)
