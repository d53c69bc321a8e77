"""Registry of special forms for the host evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
function application.
"""

from tidyeval.types.symbol import Symbol
from tidyeval.evaluation.special_forms.set_form import set_form
from tidyeval.evaluation.special_forms.progn_form import progn_form
from tidyeval.evaluation.special_forms.eval_form import eval_form
from tidyeval.evaluation.special_forms.quote_forms import quote_form, formula_form, quo_form
from tidyeval.evaluation.special_forms.lambda_form import lambda_form
from tidyeval.evaluation.special_forms.define_form import define_form
from tidyeval.evaluation.special_forms.if_form import if_form
from tidyeval.evaluation.special_forms.logic_forms import and_form, or_form
from tidyeval.evaluation.special_forms.throw_catch_form import throw_form, catch_form
from tidyeval.evaluation.special_forms.dollar_form import dollar_form

SPECIAL_FORMS = {
    Symbol("set"): set_form,
    Symbol("<-"): set_form,
    Symbol("progn"): progn_form,
    Symbol("begin"): progn_form,
    Symbol("{"): progn_form,
    Symbol("eval"): eval_form,
    Symbol("quote"): quote_form,
    Symbol("~"): formula_form,
    Symbol("quo"): quo_form,
    Symbol("lambda"): lambda_form,
    Symbol("function"): lambda_form,
    Symbol("define"): define_form,
    Symbol("if"): if_form,
    Symbol("and"): and_form,
    Symbol("&&"): and_form,
    Symbol("or"): or_form,
    Symbol("||"): or_form,
    Symbol("throw"): throw_form,
    Symbol("catch"): catch_form,
    Symbol("$"): dollar_form,
}
