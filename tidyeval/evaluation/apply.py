"""Application engine for the host evaluator.

Centralizes function application semantics:
- Tail-call awareness via TailCall objects (consumed by the trampoline).
- Lambda argument binding (positional, named, &rest) via Lambda.extend_env.
- Application of Python callables registered in the environment, using the
  `(env, args)` convention, or `(env, args, named)` for callables marked with
  `accepts_named`.
"""

from __future__ import annotations

from typing import Callable

from tidyeval import LispValue, EvaluatorFn
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError, TidyTypeError
from tidyeval.types.lambda_fn import Lambda
from tidyeval.types.tail_call import TailCall


def accepts_named(fn: Callable) -> Callable:
    """Mark a builtin as taking named arguments as a third `named` dict."""
    fn._tidy_named = True
    return fn


def apply_lambda(
    fn: Lambda,
    args: list[LispValue],
    named: dict[str, LispValue] | None,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool,
) -> LispValue | TailCall:
    """Apply a Lambda value.

    In tail position the bound body is returned as a TailCall for the
    trampoline; otherwise it is evaluated immediately.
    """
    new_env = fn.extend_env(args, named)
    if is_tail_call:
        return TailCall(fn, new_env)
    return evaluate_fn(fn.body, new_env, False)


def apply(
    head: Lambda | Callable[..., LispValue] | object,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    tail: bool = False,
    named: dict[str, LispValue] | None = None,
) -> LispValue | TailCall:
    """Apply either a Lambda or a Python callable.

    - For Lambda, defer to apply_lambda (binding and tail calls).
    - For Python callables (builtins), invoke with the runtime env and list of args.
    - Otherwise, raise a type error.
    """
    if isinstance(head, Lambda):
        return apply_lambda(head, args, named, evaluate_fn, tail)
    elif callable(head):
        if getattr(head, "_tidy_named", False):
            return head(env, args, dict(named or {}))
        if named:
            raise TidyArityError(f"{getattr(head, '__name__', head)} does not take named arguments: {sorted(named)}")
        return head(env, args)
    else:
        raise TidyTypeError(f"Cannot apply non-function {head!r}")
