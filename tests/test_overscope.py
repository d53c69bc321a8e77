import logging

import pytest

from tidyeval.evaluation.evaluator import evaluate
from tidyeval.runtime_context import base_env
from tidyeval.tidy.eval_tidy import eval_tidy
from tidyeval.tidy.overscope import (
    DATA_PRONOUN,
    ENV_PRONOUN,
    INSTALLED,
    TOP_ENV,
    Overscope,
    SelfEvalMarker,
    as_overscope,
    new_overscope,
    overscope_clean,
    overscope_eval_next,
)
from tidyeval.types.call import QUOTE_MARKER, Call, call
from tidyeval.types.dictionary import Dictionary
from tidyeval.types.environment import Environment
from tidyeval.types.errors import TidyError, TidyInvalidDataSource, TidyTypeError
from tidyeval.types.nil import MissingArg
from tidyeval.types.quosure import Quosure, new_quosure
from tidyeval.types.symbol import Symbol

x, y, a = Symbol("x"), Symbol("y"), Symbol("a")


def test_chain_shape_with_mapping_data(e1):
    overscope = as_overscope(new_quosure(x, e1), {"a": 1, 0: "unnamed"})
    bottom = overscope.parent
    top = overscope.top_env
    assert isinstance(overscope, Overscope)
    assert overscope.bottom is bottom
    assert isinstance(bottom.lookup(DATA_PRONOUN), Dictionary)
    assert bottom.parent is top
    assert top.names() == [a]
    assert top.parent is e1
    assert overscope.lexical_env is e1


def test_chain_shape_without_data(e1):
    overscope = as_overscope(new_quosure(x, e1))
    assert overscope.top_env is overscope.bottom
    assert overscope.bottom.parent is e1
    assert len(overscope.bottom.lookup(DATA_PRONOUN)) == 0


def test_unscoped_quosures_use_the_base_environment():
    overscope = as_overscope(Quosure(x))
    assert overscope.top_env.parent is base_env()


def test_environment_data_is_cloned(e1):
    data = Environment()
    data.define("a", 5)
    overscope = as_overscope(new_quosure(a, e1), data)
    top = overscope.top_env
    assert top is not data
    assert top.lookup(a) == 5
    top.define("b", 6)
    assert "b" not in data


def test_invalid_data_fails_before_evaluation(e1):
    with pytest.raises(TidyInvalidDataSource):
        as_overscope(new_quosure(x, e1), 42)


def test_new_overscope_installs_definitions():
    bottom = Environment()
    overscope = new_overscope(bottom)
    assert isinstance(overscope.lookup(QUOTE_MARKER), SelfEvalMarker)
    assert overscope.lookup(TOP_ENV) is bottom
    assert overscope.lookup(ENV_PRONOUN) is base_env()
    assert overscope.active
    # nothing is installed in bottom itself
    assert bottom.names() == []


def test_new_overscope_requires_top_above_bottom():
    with pytest.raises(TidyTypeError):
        new_overscope(Environment(), Environment())


def test_eval_next_evaluates_several_quosures_in_turn(e1, e2):
    overscope = as_overscope(new_quosure(x, e1), {"y": 100})
    enclosure = overscope.top_env.parent
    assert overscope_eval_next(overscope, new_quosure(x, e1)) == 1
    assert overscope_eval_next(overscope, new_quosure(x, e2)) == 2
    assert overscope_eval_next(overscope, new_quosure(y, e2)) == 100
    assert overscope.top_env.parent is enclosure
    assert overscope.lexical_env is e1


def test_eval_next_captures_plain_expressions(e2):
    overscope = as_overscope(new_quosure(x, e2))
    assert overscope_eval_next(overscope, call("+", x, 1), e2) == 3
    assert overscope_eval_next(overscope, Quosure(x), e2) == 2


def test_marker_restores_the_chain_on_error(e1):
    overscope = as_overscope(new_quosure(x, e1))
    top = overscope.top_env
    failing = Quosure(call("stop", "boom"), Environment(base_env()))
    with pytest.raises(TidyError, match="boom"):
        overscope_eval_next(overscope, call("list", failing), e1)
    assert top.parent is e1
    assert overscope.lexical_env is e1


def test_cleanup_strips_purpose_built_frames(e1):
    overscope = as_overscope(new_quosure(x, e1), {"a": 1})
    bottom, top = overscope.bottom, overscope.top_env
    assert overscope_clean(overscope) is overscope
    assert not any(name in overscope.vars for name in INSTALLED)
    assert bottom.names() == []
    assert top.names() == []
    assert e1.lookup(x) == 1 and e1.lookup(y) == 10
    assert not overscope.active


def test_cleanup_is_idempotent(e1):
    overscope = as_overscope(new_quosure(x, e1), {"a": 1})
    overscope_clean(overscope)
    overscope_clean(overscope)
    assert e1.names() == [x, y]


def test_cleanup_keeps_user_bindings_in_the_overscope_frame():
    overscope = new_overscope(Environment())
    overscope.define("mine", 1)
    overscope_clean(overscope)
    assert overscope.names() == [Symbol("mine")]


def test_eval_next_refuses_a_cleaned_overscope(e1):
    overscope = as_overscope(new_quosure(x, e1))
    overscope_clean(overscope)
    with pytest.raises(TidyError):
        overscope_eval_next(overscope, new_quosure(x, e1))


def test_cleanup_refuses_foreign_top(caplog):
    bottom = Environment()
    bottom.define("keep", 1)
    overscope = new_overscope(bottom)
    overscope.define(TOP_ENV, Environment(Environment()))
    with caplog.at_level(logging.WARNING, logger="tidyeval"):
        overscope_clean(overscope)
    assert "Refusing" in caplog.text
    assert bottom.names() == [Symbol("keep")]


def test_strict_cleanup_raises(monkeypatch):
    monkeypatch.setenv("TIDYEVAL_STRICT_CLEANUP", "1")
    overscope = new_overscope(Environment())
    overscope.define(TOP_ENV, Environment(Environment()))
    with pytest.raises(TidyError):
        overscope_clean(overscope)


def test_leaked_closures_see_an_emptied_frame(genv):
    fn = eval_tidy(call("function", (), x), data={"x": 100}, env=genv)
    # x now resolves past the stripped data frame into the lexical scope
    assert evaluate(Call(fn, []), genv) == 1


def test_bare_formula_evaluates_its_argument_with_data_in_scope():
    assert eval_tidy(call("~", a), data={"a": 5}) == 5


def test_missing_quosures_propagate_the_missing_argument(genv):
    assert eval_tidy(call("list", Quosure(MissingArg, genv))) == [MissingArg]


def test_quosures_captured_inside_the_overscope_do_not_loop():
    assert eval_tidy(call("eval", call("quo", a)), data={"a": 3}) == 3
