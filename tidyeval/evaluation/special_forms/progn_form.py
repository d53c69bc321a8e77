from tidyeval import EvaluatorFn
from tidyeval import SExpression, LispValue
from tidyeval.types.environment import Environment
from tidyeval.types.nil import Nil


def progn_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    result: LispValue = Nil
    for e in tail[:-1]:
        evaluate_fn(e, env)
    if tail:
        result = evaluate_fn(tail[-1], env, is_tail_call)
    return result
