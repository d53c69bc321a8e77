from tidyeval import SExpression, LispValue, EvaluatorFn
from tidyeval.types.call import Call, QUOTE_MARKER
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError
from tidyeval.types.quosure import Quosure


def quote_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, _: bool = False
) -> LispValue:
    if len(tail) != 1:
        raise TidyArityError("quote expects exactly 1 argument")
    return tail[0]


def formula_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, _: bool = False
) -> LispValue:
    """`~expr`.

    Inside an overscope the quote marker is bound and receives the literal call
    node. Outside one, the formula captures its argument with the current
    environment, like `quo`.
    """
    if len(tail) != 1:
        raise TidyArityError("~ expects exactly 1 argument")
    marker = env.get(QUOTE_MARKER)
    if callable(marker):
        return marker(Call(QUOTE_MARKER, [(None, tail[0])]))
    return Quosure(tail[0], env)


def quo_form(
    tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn, _: bool = False
) -> LispValue:
    """(quo expr) captures `expr` with the environment it is evaluated in."""
    if len(tail) != 1:
        raise TidyArityError("quo expects exactly 1 argument")
    return Quosure(tail[0], env)
