from tidyeval import EvaluatorFn
from tidyeval import SExpression, LispValue
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError, TidyTypeError


def eval_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    """eval(form [, envir])

    Evaluates `form` to obtain an expression, then evaluates that expression
    in `envir` (default: the current environment).
    """
    if len(tail) not in (1, 2):
        raise TidyArityError("eval expects one or two arguments")
    target = env
    if len(tail) == 2:
        target = evaluate_fn(tail[1], env)
        if not isinstance(target, Environment):
            raise TidyTypeError(f"eval: envir must be an environment, got {target!r}")
    expr_to_eval = evaluate_fn(tail[0], env)
    return evaluate_fn(expr_to_eval, target, is_tail_call)
