# Catch/throw non-local exits
# Usage:
#   catch("my-tag", throw("my-tag", 42))       ; => 42
#
#   catch("error", stop("boom"), "fallback")   ; => "fallback"


from typing import Any
from tidyeval import EvaluatorFn
from tidyeval import SExpression, LispValue
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError

ERROR_TAG = "error"


class ThrowException(Exception):
    """Custom exception for throw/catch non-local exit."""

    def __init__(self, tag: Any, value: Any):
        super().__init__(f"ThrowException(tag={tag}, value={value})")
        self.tag: Any = tag
        self.value: Any = value


def throw_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if len(tail) != 2:
        raise TidyArityError("throw expects a tag and a value")
    tag_expr, val_expr = tail
    tag = evaluate_fn(tag_expr, env)
    val = evaluate_fn(val_expr, env)
    raise ThrowException(tag, val)


def catch_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    """
    catch(tag, body [, fallback])
    - Catches throw(tag, value) and returns value
    - The "error" tag also catches Python exceptions raised by body
    - fallback, when given, is evaluated instead of returning the caught value
      for errors; non-matching throws propagate
    """
    if len(tail) not in (2, 3):
        raise TidyArityError("catch expects a tag, a body and an optional fallback")
    tag_expr = tail[0]
    body_expr = tail[1]
    fallback_expr = tail[2] if len(tail) > 2 else None

    tag = evaluate_fn(tag_expr, env)

    try:
        # The body is resolved here so that errors surface inside the try
        return evaluate_fn(body_expr, env)

    except ThrowException as ex:
        if ex.tag == tag:
            return ex.value
        raise

    except Exception as py_ex:
        if tag != ERROR_TAG:
            raise
        if fallback_expr is not None:
            return evaluate_fn(fallback_expr, env, is_tail_call)
        return {
            "tag": "system-error",
            "exception": type(py_ex).__name__,
            "message": str(py_ex),
        }
