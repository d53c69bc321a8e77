"""Dictionary pronouns.

A Dictionary is a lookup-by-name view over a data source: a mapping of names
to values, or an Environment (looked up live in its own frame, or through its
parents as well for an inheriting dictionary). Absent
names fail loudly with TidyMissingName; present values are returned even when
they are empty (None, Nil, zero-length arrays).
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Iterator

import numpy as np

from tidyeval import LispValue
from tidyeval.types.environment import Environment, NotFound
from tidyeval.types.errors import (
    TidyInvalidDataSource,
    TidyMissingName,
    TidyReadOnly,
    TidyTypeError,
)
from tidyeval.types.symbol import Symbol


def _name(name: str | Symbol) -> str:
    if isinstance(name, Symbol):
        return name.id
    if isinstance(name, str):
        return name
    raise TidyTypeError(f"Pronoun names must be strings or symbols, got {name!r}")


def is_named_key(key) -> bool:
    """Only non-empty string (or Symbol) keys count as names."""
    if isinstance(key, Symbol):
        return bool(key.id)
    return isinstance(key, str) and key != ""


def is_structured_array(x) -> bool:
    return isinstance(x, np.ndarray) and x.dtype.names is not None


def columns(arr: np.ndarray) -> dict[str, np.ndarray]:
    """Field name -> column view for a numpy structured array."""
    return {field: arr[field] for field in arr.dtype.names}


class Dictionary:
    """Fail-fast, optionally read-only name lookup over a data source."""

    __slots__ = ("source", "read_only", "inherit")

    def __init__(self, source: Mapping | Environment, read_only: bool = False, inherit: bool = False):
        self.source = source
        self.read_only = read_only
        self.inherit = inherit

    def lookup(self, name: str | Symbol) -> LispValue:
        key = _name(name)
        if isinstance(self.source, Environment):
            if self.inherit:
                value = self.source.get(Symbol(key))
            else:
                value = self.source.vars.get(Symbol(key), NotFound)
            if value is NotFound:
                raise TidyMissingName(key)
            return value
        if key not in self.source:
            raise TidyMissingName(key)
        return self.source[key]

    def assign(self, name: str | Symbol, value: LispValue) -> None:
        key = _name(name)
        if self.read_only:
            raise TidyReadOnly(f"Can't modify the data pronoun (tried to assign '{key}')")
        if isinstance(self.source, Environment):
            self.source.define(Symbol(key), value)
        elif isinstance(self.source, MutableMapping):
            self.source[key] = value
        else:
            raise TidyReadOnly(f"Data source of type {type(self.source).__name__} is immutable")

    def has(self, name: str | Symbol) -> bool:
        key = _name(name)
        if isinstance(self.source, Environment):
            return self.source.has(Symbol(key), inherit=self.inherit)
        return key in self.source

    def names(self) -> list[str]:
        if isinstance(self.source, Environment):
            if not self.inherit:
                return [s.id for s in self.source.names()]
            seen = {}
            for frame in self.source.ancestors():
                for s in frame.names():
                    seen.setdefault(s.id, None)
            return list(seen)
        return [str(k) if isinstance(k, Symbol) else k for k in self.source if is_named_key(k)]

    __getitem__ = lookup
    __setitem__ = assign
    __contains__ = has

    def __len__(self) -> int:
        return len(self.names())

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        kind = "environment" if isinstance(self.source, Environment) else "mapping"
        ro = " read-only" if self.read_only else ""
        return f"<dictionary:{ro} {kind} [{', '.join(self.names())}]>"


def as_dictionary(source, read_only: bool = False, inherit: bool = False) -> Dictionary:
    """Coerce a data source to a Dictionary.

    Accepts None (an empty dictionary), an existing Dictionary, a mapping, an
    Environment, or a numpy structured array (one entry per field). `inherit`
    only matters for environments: names bound in parent frames become visible.
    Raises TidyInvalidDataSource for anything else.
    """
    if source is None:
        return Dictionary({}, read_only)
    if isinstance(source, Dictionary):
        return Dictionary(source.source, read_only, inherit or source.inherit)
    if isinstance(source, Environment):
        return Dictionary(source, read_only, inherit)
    if is_structured_array(source):
        return Dictionary(columns(source), read_only)
    if isinstance(source, Mapping):
        if any(isinstance(k, Symbol) for k in source):
            source = {(k.id if isinstance(k, Symbol) else k): v for k, v in source.items()}
        return Dictionary(source, read_only)
    raise TidyInvalidDataSource(
        f"Can't convert an object of type {type(source).__name__} to a dictionary"
    )


def extract(obj, name: str | Symbol) -> LispValue:
    """Name-based extraction used by `$` and `[[`.

    A bare Environment (such as the `.env` pronoun) is searched through its
    parents, like an unqualified name.
    """
    if isinstance(obj, Dictionary):
        return obj.lookup(name)
    if isinstance(obj, Environment):
        return as_dictionary(obj, read_only=True, inherit=True).lookup(name)
    if isinstance(obj, Mapping) or is_structured_array(obj):
        return as_dictionary(obj, read_only=True).lookup(name)
    raise TidyTypeError(f"Can't extract '{_name(name)}' from {type(obj).__name__}")
