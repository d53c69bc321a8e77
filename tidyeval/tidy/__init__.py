"""Tidy evaluation: quosures, overscopes and the eval_tidy entry points."""

from tidyeval.config import configure_logging
from tidyeval.runtime_context import base_env, global_env
from tidyeval.tidy.eval_tidy import eval_tidy, eval_tidy_
from tidyeval.tidy.overscope import (
    Overscope,
    SelfEvalMarker,
    as_overscope,
    new_overscope,
    overscope_clean,
    overscope_eval_next,
)
from tidyeval.types.dictionary import Dictionary, as_dictionary
from tidyeval.types.quosure import Quosure, as_quosure, is_quosure, new_quosure

configure_logging()

__all__ = [
    "Dictionary",
    "Overscope",
    "Quosure",
    "SelfEvalMarker",
    "as_dictionary",
    "as_overscope",
    "as_quosure",
    "base_env",
    "eval_tidy",
    "eval_tidy_",
    "global_env",
    "is_quosure",
    "new_overscope",
    "new_quosure",
    "overscope_clean",
    "overscope_eval_next",
]
