from tidyeval import SExpression, EvaluatorFn
from tidyeval.types.environment import Environment
from tidyeval.builtin.np_helpers import to_bool


def and_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> SExpression:
    """Short-circuiting logical AND special form.

    and(a, b, c, ...) evaluates each operand left-to-right until a falsey value
    is found, which stops evaluation and returns False. If all operands are
    truthy, returns True. With zero operands, returns True.
    Operands after the first falsey one are never evaluated.
    """
    for expr in tail:
        if not to_bool(evaluate_fn(expr, env)):
            return False
    return True


def or_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, is_tail_call: bool = False) -> SExpression:
    """Short-circuiting logical OR special form.

    or(a, b, c, ...) evaluates each operand left-to-right and returns True at
    the first truthy one, leaving the rest unevaluated. Returns False if none
    are truthy, including with zero operands.
    """
    for expr in tail:
        if to_bool(evaluate_fn(expr, env)):
            return True
    return False
