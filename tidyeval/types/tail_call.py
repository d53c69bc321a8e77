from tidyeval.types.lambda_fn import Lambda
from tidyeval.types.environment import Environment


class TailCall:
    """A deferred lambda body evaluation, consumed by the evaluator trampoline."""

    __slots__ = ("fn", "env")

    def __init__(self, fn: Lambda, env: Environment):
        self.fn = fn
        self.env = env
