import pytest

from tidyeval.runtime_context import base_env, reset_global_env
from tidyeval.types.environment import Environment
from tidyeval.types.symbol import Symbol


@pytest.fixture(autouse=True)
def genv():
    """A fresh global environment for each test, with x = 1."""
    env = reset_global_env()
    env.define(Symbol("x"), 1)
    return env


@pytest.fixture
def env():
    """A plain evaluation environment chained to the builtins."""
    return Environment(base_env())


@pytest.fixture
def e1(genv):
    e = Environment(genv)
    e.define(Symbol("x"), 1)
    e.define(Symbol("y"), 10)
    return e


@pytest.fixture
def e2(genv):
    e = Environment(genv)
    e.define(Symbol("x"), 2)
    e.define(Symbol("y"), 20)
    return e
