"""Core evaluator and trampoline for tidyeval.

A tree-walking evaluator over Symbols, Calls, literals and embedded Quosures.
Special forms are dispatched by head symbol before ordinary application; tail
calls are returned as TailCall objects and stepped by `evaluate`.

Quosures reached during evaluation are handed to whatever is bound to the
quote marker `~` in scope. Inside an overscope that is the self-evaluation
marker; elsewhere nothing is bound and a quosure evaluates to itself.
"""

from __future__ import annotations

from tidyeval import SExpression, LispValue
from tidyeval.evaluation.apply import apply
from tidyeval.evaluation.special_forms import SPECIAL_FORMS
from tidyeval.types.call import Call, QUOTE_MARKER
from tidyeval.types.environment import Environment
from tidyeval.types.quosure import Quosure
from tidyeval.types.symbol import Symbol
from tidyeval.types.tail_call import TailCall


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """
    Trampoline evaluator: tail-call aware evaluation to a final value.
    """
    result = evaluate0(expr, env, True)  # Start in 'tail' mode.
    while isinstance(result, TailCall):
        result = evaluate0(result.fn.body, result.env, True)
    return result


def self_evaluate(quo: Quosure, env: Environment) -> LispValue:
    """Dispatch an embedded quosure to the quote marker bound in `env`."""
    marker = env.get(QUOTE_MARKER)
    if callable(marker):
        return marker(quo)
    return quo


def evaluate0(
    expr: SExpression,
    env: Environment,
    is_tail_call: bool = False,
) -> LispValue:
    """
    Core evaluator: single-step evaluation with tail-call awareness.
    Returns either a value or, in tail position only, a TailCall.
    """
    match expr:
        case Quosure():
            return self_evaluate(expr, env)

        case Symbol():
            return env.lookup(expr)

        case Call(head=head):
            # --- Special forms handling ---
            if isinstance(head, Symbol) and head in SPECIAL_FORMS:
                return SPECIAL_FORMS[head](expr.positional, env, evaluate0, is_tail_call)

            fn = evaluate(head, env)
            args: list[LispValue] = []
            named: dict[str, LispValue] = {}
            for name, arg in expr.args:
                # Arguments are always fully resolved so builtins never see TailCalls
                val = evaluate(arg, env)
                if name:
                    named[name] = val
                else:
                    args.append(val)
            return apply(fn, args, env, evaluate0, is_tail_call, named)

    # --- Atoms return as-is ---
    return expr
