from tidyeval import EvaluatorFn
from tidyeval import SExpression, LispValue
from tidyeval.builtin.np_helpers import to_bool
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError
from tidyeval.types.nil import Nil


def if_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if len(tail) < 2:
        raise TidyArityError("if requires a condition and a then-expression")

    cond = evaluate_fn(tail[0], env)

    if to_bool(cond):
        return evaluate_fn(tail[1], env, is_tail_call)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env, is_tail_call)
    else:
        return Nil
