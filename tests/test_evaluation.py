import numpy as np
import pytest

from tidyeval.evaluation.evaluator import evaluate
from tidyeval.evaluation.special_forms.throw_catch_form import ThrowException
from tidyeval.types.call import Call, call, is_call, is_quote_marker_call
from tidyeval.types.errors import TidyArityError, TidyError, TidyTypeError, TidyUnboundSymbol
from tidyeval.types.nil import Nil
from tidyeval.types.quosure import Quosure
from tidyeval.types.symbol import Symbol

x, y, f, n = Symbol("x"), Symbol("y"), Symbol("f"), Symbol("n")


def test_self_evaluating_literals(env):
    assert evaluate(1, env) == 1
    assert evaluate(3.14, env) == 3.14
    assert evaluate("hello", env) == "hello"
    assert evaluate(None, env) is None


def test_symbol_lookup(env):
    env.define(x, 42)
    assert evaluate(x, env) == 42
    with pytest.raises(TidyUnboundSymbol):
        evaluate(Symbol("z"), env)


def test_call_nodes_are_immutable_values():
    c = call("+", 1, x, na=2)
    assert c.head == Symbol("+")
    assert c.args == ((None, 1), (None, x), ("na", 2))
    assert c == call("+", 1, x, na=2)
    assert is_call(c, "+") and not is_call(c, "-")
    assert is_quote_marker_call(call("~", x))
    with pytest.raises(AttributeError):
        c.head = Symbol("-")


def test_builtin_application(env):
    assert evaluate(call("+", 1, 2, 3), env) == 6
    assert evaluate(call("-", 10, call("*", 2, 3)), env) == 4
    assert evaluate(call("==", 2, 2), env) is True


def test_builtins_reject_unexpected_named_arguments(env):
    with pytest.raises(TidyArityError):
        evaluate(call("+", 1, na=2), env)


def test_list_with_names_builds_a_dict(env):
    assert evaluate(call("list", 1, 2), env) == [1, 2]
    assert evaluate(call("list", 1, a=2), env) == {0: 1, "a": 2}


def test_vectorised_arithmetic(env):
    result = evaluate(call("*", call("c", 1, 2, 3), 2), env)
    assert np.array_equal(result, np.array([2, 4, 6]))


def test_quote(env):
    assert evaluate(call("quote", x), env) == x


def test_lambda_positional_and_named(env):
    evaluate(call("define", f, call("function", (x, y), call("-", x, y))), env)
    assert evaluate(call("f", 10, 3), env) == 7
    assert evaluate(call("f", y=10, x=1), env) == -9
    assert evaluate(call("f", 3, x=10), env) == 7


def test_lambda_rest_parameters(env):
    more = Symbol("more")
    fn = evaluate(call("function", (x, Symbol("&rest"), more), more), env)
    assert evaluate(Call(fn, [(None, 1), (None, 2), (None, 3)]), env) == [2, 3]


def test_lambda_arity_errors(env):
    evaluate(call("define", f, call("function", (x,), x)), env)
    with pytest.raises(TidyArityError):
        evaluate(call("f"), env)
    with pytest.raises(TidyArityError):
        evaluate(call("f", 1, 2), env)
    with pytest.raises(TidyArityError):
        evaluate(call("f", 1, z=2), env)


def test_closures_capture_their_environment(env):
    make = call("function", (x,), call("function", (y,), call("+", x, y)))
    evaluate(call("define", Symbol("adder"), Call(make, [(None, 10)])), env)
    assert evaluate(call("adder", 5), env) == 15


def test_if_form(env):
    assert evaluate(call("if", False, 1, 2), env) == 2
    assert evaluate(call("if", True, 1, 2), env) == 1
    assert evaluate(call("if", False, 1), env) is Nil


def test_logic_forms_short_circuit(env):
    assert evaluate(call("||", True, call("stop", "never")), env) is True
    assert evaluate(call("&&", False, call("stop", "never")), env) is False
    with pytest.raises(TidyError, match="reached"):
        evaluate(call("or", False, call("stop", "reached")), env)


def test_progn_returns_last_value(env):
    assert evaluate(call("{", call("define", x, 3), call("+", x, 1)), env) == 4


def test_set_requires_existing_binding(env):
    env.define(x, 1)
    assert evaluate(call("set", x, 5), env) == 5
    assert env.lookup(x) == 5
    with pytest.raises(TidyUnboundSymbol):
        evaluate(call("set", Symbol("nope"), 5), env)


def test_tail_recursion_does_not_grow_the_stack(env):
    body = call("if", call("==", n, 0), "done", call("loop", call("-", n, 1)))
    evaluate(call("define", Symbol("loop"), call("function", (n,), body)), env)
    assert evaluate(call("loop", 5000), env) == "done"


def test_catch_and_throw(env):
    assert evaluate(call("catch", "t", call("throw", "t", 42)), env) == 42
    with pytest.raises(ThrowException):
        evaluate(call("catch", "t", call("throw", "other", 42)), env)


def test_catch_error_tag(env):
    caught = evaluate(call("catch", "error", call("stop", "boom")), env)
    assert caught["message"] == "boom"
    assert caught["exception"] == "TidyError"
    assert evaluate(call("catch", "error", call("stop", "boom"), "fallback"), env) == "fallback"
    with pytest.raises(TidyError):
        evaluate(call("catch", "t", call("stop", "boom")), env)


def test_eval_form(env):
    assert evaluate(call("eval", call("quote", call("+", 1, 2))), env) == 3


def test_formula_captures_outside_an_overscope(env):
    q = evaluate(call("~", x), env)
    assert isinstance(q, Quosure)
    assert q.expr == x
    assert q.env is env


def test_quosures_are_inert_outside_an_overscope(env):
    q = Quosure(call("stop", "never"), env)
    assert evaluate(q, env) is q


def test_non_functions_cannot_be_applied(env):
    with pytest.raises(TidyTypeError):
        evaluate(Call(42, []), env)
