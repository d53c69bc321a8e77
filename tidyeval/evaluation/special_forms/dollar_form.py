from tidyeval import EvaluatorFn
from tidyeval import SExpression, LispValue
from tidyeval.types.dictionary import extract
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError, TidyTypeError
from tidyeval.types.symbol import Symbol


def dollar_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool = False,
) -> LispValue:
    """obj$name

    The left side is evaluated, the right side is a bare name (Symbol or
    string) and is never evaluated. Used with the `.data` and `.env` pronouns.
    """
    if len(tail) != 2:
        raise TidyArityError("$ expects exactly 2 arguments")
    obj_expr, name = tail
    if not isinstance(name, (Symbol, str)):
        raise TidyTypeError(f"$ expects a name on its right side, got {name!r}")
    return extract(evaluate_fn(obj_expr, env), name)
