from tidyeval import EvaluatorFn
from tidyeval import SExpression, LispValue
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError
from tidyeval.types.nil import Nil


def define_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool = False,
) -> LispValue:
    """
    define(name, value) binds `name` in the current frame.
    """
    if len(tail) != 2:
        raise TidyArityError("define requires exactly 2 arguments")

    name, val_expr = tail
    value = evaluate_fn(val_expr, env)
    env.define(name, value)
    return Nil
