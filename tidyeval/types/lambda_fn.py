"""Lambda function representation for the host evaluator."""

from __future__ import annotations

from io import StringIO

from tidyeval import SExpression, LispValue
from tidyeval.types.environment import Environment
from tidyeval.types.symbol import Symbol


class Lambda:
    """A first-class lambda with formal parameters, body, and closure env."""

    __slots__ = ("formals", "body", "env")

    def __init__(
        self, formals: list[Symbol], body: SExpression, env: Environment | None = None
    ):
        self.formals: list[Symbol] = list(formals)
        self.body: SExpression = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("function(")
            buffer.write(", ".join(str(f) for f in self.formals))
            buffer.write(") ")
            buffer.write(str(self.body))
            return buffer.getvalue()

    def __repr__(self) -> str:
        return str(self)

    def extend_env(
        self, args: list[LispValue], named: dict[str, LispValue] | None = None
    ) -> Environment:
        """
        Bind argument values to this lambda's formals and return a new
        Environment (child of the closure env) for evaluating the body.
        """
        from tidyeval.types.bind import bind_arguments
        return bind_arguments(self.formals, list(args), self.env, named)
