"""Call nodes for the tidyeval expression model.

An expression is a literal (any plain Python value), a Symbol, a Call, or a
Quosure embedded by value. Calls are immutable and may be shared freely.
"""

from __future__ import annotations

from typing import Iterable, Optional

from tidyeval import SExpression
from tidyeval.types.symbol import Symbol

QUOTE_MARKER = Symbol("~")


class Call:
    """A call node: a head expression applied to ordered, optionally named args."""

    __slots__ = ("head", "args")

    def __init__(
        self, head: SExpression, args: Iterable[tuple[Optional[str], SExpression]] = ()
    ):
        object.__setattr__(self, "head", head)
        object.__setattr__(self, "args", tuple((name, expr) for name, expr in args))

    def __setattr__(self, key, value):
        raise AttributeError("Call nodes are immutable")

    @property
    def positional(self) -> list[SExpression]:
        """Argument expressions in order, names dropped."""
        return [expr for _, expr in self.args]

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Call)
            and self.head == other.head
            and len(self.args) == len(other.args)
            and all(
                n1 == n2 and _expr_equal(e1, e2)
                for (n1, e1), (n2, e2) in zip(self.args, other.args)
            )
        )

    def __hash__(self) -> int:
        return hash((self.head, tuple(name for name, _ in self.args)))

    def __len__(self) -> int:
        return len(self.args)

    def __str__(self) -> str:
        parts = []
        for name, expr in self.args:
            parts.append(f"{name} = {expr}" if name else str(expr))
        return f"{self.head}({', '.join(parts)})"

    def __repr__(self) -> str:
        return f"Call({self.head!r}, {list(self.args)!r})"


def _expr_equal(a, b) -> bool:
    # numpy arrays do not compare to a single bool
    if a is b:
        return True
    try:
        return bool(a == b)
    except ValueError:
        return False


def call(head: SExpression | str, *args: SExpression, **named: SExpression) -> Call:
    """Build a Call. A string head is interned as a Symbol.

    Positional arguments come first, followed by named ones in keyword order.
    """
    if isinstance(head, str):
        head = Symbol(head)
    pairs = [(None, a) for a in args]
    pairs.extend(named.items())
    return Call(head, pairs)


def is_call(expr: SExpression, name: str | Symbol | None = None) -> bool:
    """True if `expr` is a Call, optionally one whose head is the symbol `name`."""
    if not isinstance(expr, Call):
        return False
    if name is None:
        return True
    if isinstance(name, str):
        name = Symbol(name)
    return expr.head == name


def is_quote_marker_call(expr: SExpression) -> bool:
    """True for a literal `~` call appearing in source."""
    return is_call(expr, QUOTE_MARKER)
