"""Runtime environment for tidyeval.

The Environment stores bindings of Symbols to evaluated values and supports
nested scopes via an `outer` link. Frames are shared: any number of children,
closures and quosures may point at the same frame, so frames are never torn
down explicitly. To release what a frame holds, unbind its names instead.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Optional

from tidyeval import LispValue
from tidyeval.types.errors import TidyInvalidSymbol, TidyUnboundSymbol
from tidyeval.types.symbol import Symbol, as_symbol


class _NotFoundType:
    def __repr__(self): return "<not found>"
    def __bool__(self): return False


NotFound = _NotFoundType()


class Environment:
    """Hierarchical mapping from Symbols to values with a single parent link."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    @property
    def parent(self) -> Optional[Environment]:
        return self.outer

    def define(self, name: Symbol | str, value: LispValue) -> None:
        """Bind `name` to `value` in this frame.

        Strings are accepted for convenience and interned as Symbols.
        Raises TidyInvalidSymbol for anything else.
        """
        if isinstance(name, str):
            name = Symbol(name)
        if not isinstance(name, Symbol):
            raise TidyInvalidSymbol(f"Cannot define {name} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: Symbol | str, default: LispValue = NotFound) -> LispValue:
        """Chain lookup that returns `default` (NotFound) instead of raising."""
        name = as_symbol(name)
        env = self.find(name)
        if env is None:
            return default
        return env.vars[name]

    def set(self, name: Symbol, value: LispValue) -> None:
        """Update an existing binding for `name` in the environment chain.

        Raises TidyUnboundSymbol if the symbol is not found.
        """
        env = self.find(name)
        if env is None:
            raise TidyUnboundSymbol(f"Cannot set unbound symbol {name}")
        env.vars[name] = value

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`, walking the parent chain.

        Raises TidyUnboundSymbol if not found.
        """
        env = self.find(name)
        if env is None:
            raise TidyUnboundSymbol(f"Cannot lookup unbound symbol {name}")
        return env.vars[name]

    def has(self, name: Symbol | str, inherit: bool = False) -> bool:
        name = as_symbol(name)
        if inherit:
            return self.find(name) is not None
        return name in self.vars

    def __contains__(self, name: Symbol | str) -> bool:
        return self.has(name)

    def names(self) -> list[Symbol]:
        """Names bound in this frame only."""
        return list(self.vars)

    def unbind(self, names: Iterable[Symbol | str]) -> None:
        """Remove bindings from this frame. Absent names are ignored."""
        for name in names:
            self.vars.pop(as_symbol(name), None)

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            if not isinstance(k, Symbol):
                raise TidyInvalidSymbol(f"Cannot define {k} as a symbol")
            self.vars[k] = v

    def clone(self, parent: Optional[Environment] = None) -> Environment:
        """Shallow copy of this frame's bindings onto a new parent."""
        env = Environment(parent)
        env.vars.update(self.vars)
        return env

    def unsafe_set_parent(self, parent: Optional[Environment]) -> None:
        """Repoint this frame's parent in place.

        Every holder of this frame observes the new parent. No cycle checks are
        made; only the overscope rechaining code should call this.
        """
        self.outer = parent

    def ancestors(self):
        """Yield this frame and each parent up to the root."""
        env: Optional[Environment] = self
        while env is not None:
            yield env
            env = env.outer

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            if isinstance(v, Environment):
                buffer.write(f"{k}: <Environment>")
            else:
                buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {len(self.vars)} binding(s) at {id(self):#x}>"
