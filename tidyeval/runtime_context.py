from __future__ import annotations
from typing import Optional

from tidyeval.types.environment import Environment

# NOTE: For now this is process-global. Evaluation is single-threaded; a
# threaded host should give each thread its own environments and overscopes.
_base_env: Optional[Environment] = None
_global_env: Optional[Environment] = None


def base_env() -> Environment:
    """Root environment holding the builtins. Unscoped quosures resolve here."""
    global _base_env
    if _base_env is None:
        from tidyeval.builtin.env_builtin import register

        env = Environment()
        register(env)
        _base_env = env
    return _base_env


def global_env() -> Environment:
    """User-level environment, a child of the base environment."""
    global _global_env
    if _global_env is None:
        _global_env = Environment(base_env())
    return _global_env


def reset_global_env() -> Environment:
    """Discard user-level bindings by replacing the global environment."""
    global _global_env
    _global_env = Environment(base_env())
    return _global_env
