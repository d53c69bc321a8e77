from __future__ import annotations


class NilType:
    def __repr__(self): return "nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)


Nil = NilType()


class MissingArgType:
    """Placeholder for an argument that was never supplied (an empty quosure)."""

    def __repr__(self): return "<missing>"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, MissingArgType)

    def __hash__(self):
        return hash(MissingArgType)


MissingArg = MissingArgType()


def missing_arg() -> MissingArgType:
    return MissingArg


def is_missing(x) -> bool:
    return x is MissingArg
