from tidyeval import EvaluatorFn
from tidyeval import SExpression, LispValue
from tidyeval.types.errors import TidyInvalidSymbol, TidyArityError
from tidyeval.types.symbol import Symbol
from tidyeval.types.environment import Environment


def set_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if len(tail) != 2:
        raise TidyArityError("set requires exactly 2 arguments: set(var, value)")
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        raise TidyInvalidSymbol(f"set first argument must be a Symbol, got {var_sym}")
    value = evaluate_fn(val_expr, env)
    env.set(var_sym, value)

    return value
