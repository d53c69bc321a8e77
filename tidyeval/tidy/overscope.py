"""Overscopes: dynamic scope chains for tidy evaluation.

An overscope is a chain of frames evaluated as one environment:

    overscope -> bottom (.data pronoun) -> overlay data frame(s) = top -> lexical env

`overscope` itself only holds what this module installs: the quote marker
`~` (bound to a SelfEvalMarker), `.top_env` and the `.env` pronoun. The parent
of `top` is rechained to the environment of whichever quosure is currently
evaluating, so overlay bindings take precedence and the quosure's own lexical
scope is visible underneath them.

Rechaining is always bracketed: the previous parent of `top` (and the previous
`.env`) are restored on every exit path before control returns to the caller.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from tidyeval import LispValue, SExpression
from tidyeval.config import strict_cleanup
from tidyeval.evaluation.evaluator import evaluate
from tidyeval.runtime_context import base_env
from tidyeval.types.call import Call, QUOTE_MARKER
from tidyeval.types.dictionary import (
    Dictionary,
    as_dictionary,
    columns,
    is_named_key,
    is_structured_array,
)
from tidyeval.types.environment import Environment, NotFound
from tidyeval.types.errors import TidyArityError, TidyError, TidyTypeError
from tidyeval.types.nil import MissingArg
from tidyeval.types.quosure import Quosure, as_quosure
from tidyeval.types.symbol import Symbol

logger = logging.getLogger(__name__)

DATA_PRONOUN = Symbol(".data")
ENV_PRONOUN = Symbol(".env")
TOP_ENV = Symbol(".top_env")

# Names bound directly in the overscope frame; removed by overscope_clean
INSTALLED = (QUOTE_MARKER, TOP_ENV, ENV_PRONOUN)


class Overscope(Environment):
    """The evaluation frame of an overscope chain, tagged by its type."""

    __slots__ = ()

    @property
    def bottom(self) -> Optional[Environment]:
        return self.outer

    @property
    def top_env(self) -> Optional[Environment]:
        return self.vars.get(TOP_ENV)

    @property
    def lexical_env(self) -> Optional[Environment]:
        """Current value of the `.env` pronoun."""
        return self.vars.get(ENV_PRONOUN)

    @property
    def active(self) -> bool:
        """False once overscope_clean has run."""
        return QUOTE_MARKER in self.vars


def _reaches(env: Environment, target: Environment) -> bool:
    return any(frame is target for frame in env.ancestors())


@contextmanager
def _rechained(overscope: Overscope, top: Environment, lexical: Environment) -> Iterator[None]:
    """Point `.env` and the parent of `top` at `lexical` for the duration of the block."""
    saved_parent = top.outer
    saved_env = overscope.vars.get(ENV_PRONOUN, NotFound)

    overscope.define(ENV_PRONOUN, lexical)
    # A quosure captured inside this overscope already sees the overlay;
    # rechaining to it would make the chain loop back on itself.
    rechain = not _reaches(lexical, top)
    if rechain:
        top.unsafe_set_parent(lexical)
    logger.debug(f"rechain top={top!r} -> {lexical!r} (applied={rechain})")
    try:
        yield
    finally:
        top.unsafe_set_parent(saved_parent)
        if saved_env is NotFound:
            overscope.unbind([ENV_PRONOUN])
        else:
            overscope.define(ENV_PRONOUN, saved_env)


class SelfEvalMarker:
    """The callable bound to `~` inside an overscope.

    The evaluator calls it with every quosure it reaches, and with literal
    `~expr` calls found in source.
    """

    __slots__ = ("overscope", "top")

    def __init__(self, overscope: Overscope, top: Environment):
        self.overscope = overscope
        self.top = top

    def __call__(self, node: Quosure | Call) -> LispValue:
        if not isinstance(node, Quosure):
            return self._eval_formula(node)
        if node.is_missing:
            return MissingArg

        lexical = node.env
        if lexical is None:
            lexical = self.overscope.lexical_env or base_env()
        with _rechained(self.overscope, self.top, lexical):
            return evaluate(node.expr, self.overscope)

    def _eval_formula(self, node: Call) -> LispValue:
        # Evaluated one level up, where overscoped data is visible but the
        # marker itself is not
        if len(node.args) != 1:
            raise TidyArityError("~ expects exactly 1 argument")
        return evaluate(node.args[0][1], self.overscope.outer)

    def __repr__(self) -> str:
        return f"<self-eval marker top={self.top!r}>"


def _named_bindings(data) -> dict[Symbol, LispValue]:
    """Named entries of a mapping-like data source, as Symbol bindings.

    Unnamed entries (non-string or empty keys) never take part in overscoping.
    """
    if is_structured_array(data):
        data = columns(data)
    bindings = {}
    for key, value in data.items():
        if is_named_key(key):
            bindings[key if isinstance(key, Symbol) else Symbol(key)] = value
    dropped = len(data) - len(bindings)
    if dropped:
        logger.debug(f"discarding {dropped} unnamed data entr{'y' if dropped == 1 else 'ies'}")
    return bindings


def as_overscope(quo: Quosure, data=None) -> Overscope:
    """Build an overscope for evaluating `quo` with `data` in scope.

    `data` may be None, a mapping, an Environment (its bindings are cloned), a
    Dictionary, or a numpy structured array. Any other shape raises
    TidyInvalidDataSource before anything is evaluated.
    """
    data_src = as_dictionary(data, read_only=True)
    source = data.source if isinstance(data, Dictionary) else data
    enclosure = quo.env if quo.env is not None else base_env()

    if source is None:
        top = bottom = Environment(enclosure)
    else:
        if isinstance(source, Environment):
            top = source.clone(enclosure)
        else:
            top = Environment(enclosure)
            top.update(_named_bindings(source))
        bottom = Environment(top)

    bottom.define(DATA_PRONOUN, data_src)
    logger.debug(f"built overscope with {len(top.vars) if top is not bottom else 0} overlay binding(s)")
    return new_overscope(bottom, top, enclosure)


def new_overscope(
    bottom: Environment,
    top: Optional[Environment] = None,
    enclosure: Optional[Environment] = None,
) -> Overscope:
    """Install the tidy evaluation definitions above a custom dynamic scope.

    `bottom` is where overscoped bindings start, `top` (default: `bottom`) is
    the frame whose parent gets rechained, and `enclosure` (default: the base
    environment) is the initial value of `.env`. A fresh child of `bottom` is
    created to hold the definitions, so cleanup never has to guess which
    bindings in `bottom` belong to the user.
    """
    top = top if top is not None else bottom
    enclosure = enclosure if enclosure is not None else base_env()
    if not _reaches(bottom, top):
        raise TidyTypeError("`top` must be `bottom` or one of its parents")

    overscope = Overscope(bottom)
    overscope.define(QUOTE_MARKER, SelfEvalMarker(overscope, top))
    overscope.define(TOP_ENV, top)
    overscope.define(ENV_PRONOUN, enclosure)
    return overscope


def overscope_eval_next(
    overscope: Overscope, quo: Quosure | SExpression, env: Optional[Environment] = None
) -> LispValue:
    """Evaluate a quosure in an existing overscope.

    Non-quosures are captured with `env` (default: the base environment), which
    also stands in for the environment of an unscoped quosure. Several quosures
    can be evaluated in turn in the same overscope.
    """
    if not overscope.active:
        raise TidyError("Can't evaluate in an overscope that has been cleaned up")
    env = env if env is not None else base_env()
    quo = as_quosure(quo, env)
    lexical = quo.env if quo.env is not None else env

    with _rechained(overscope, overscope.top_env, lexical):
        return evaluate(quo.expr, overscope)


def overscope_clean(overscope: Overscope) -> Overscope:
    """Remove everything tidy evaluation installed in `overscope`.

    Unbinds `~`, `.top_env` and `.env` from the overscope frame, then empties
    every frame from its parent up to and including the top, leaving the
    lexical enclosure above alone. Frames are emptied rather than discarded,
    so closures leaked out of the evaluation still hold a valid (empty) frame.
    Safe to call more than once.
    """
    start = overscope.outer
    top = overscope.vars.get(TOP_ENV, start)
    overscope.unbind(INSTALLED)
    if start is None:
        return overscope

    stop = top.outer
    frames = []
    frame = start
    while frame is not stop:
        if frame is None:
            break
        frames.append(frame)
        frame = frame.outer

    if frame is not stop or not any(f is top for f in frames):
        msg = "Refusing to clean overscope: `.top_env` is not a parent of the overscope"
        if strict_cleanup():
            raise TidyError(msg)
        logger.warning(msg)
        return overscope

    for frame in frames:
        frame.unbind(frame.names())
    logger.debug(f"cleaned {len(frames)} overscope frame(s)")
    return overscope
