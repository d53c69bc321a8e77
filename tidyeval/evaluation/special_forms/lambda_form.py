from tidyeval import EvaluatorFn
from tidyeval import SExpression, LispValue
from tidyeval.types.call import Call
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyArityError, TidyInvalidSymbol
from tidyeval.types.lambda_fn import Lambda
from tidyeval.types.nil import Nil
from tidyeval.types.symbol import Symbol


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    evaluate_fn: EvaluatorFn,
    _: bool = False,
) -> LispValue:
    """function((x, y), body...)

    The parameter list is a literal list or tuple of Symbols. Several body
    forms are an implicit progn; no body forms return nil when invoked.
    The closure captures the environment the lambda is evaluated in.
    """
    if not tail:
        raise TidyArityError("lambda requires at least a parameter list")

    params = tail[0]
    if not isinstance(params, (list, tuple)) or not all(isinstance(p, Symbol) for p in params):
        raise TidyInvalidSymbol(f"lambda parameters must be a sequence of symbols, got {params!r}")
    body_forms = tail[1:]

    if not body_forms:
        body = Nil
    elif len(body_forms) == 1:
        body = body_forms[0]
    else:
        body = Call(Symbol("progn"), [(None, f) for f in body_forms])

    return Lambda(list(params), body, env)
