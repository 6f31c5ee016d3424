"""Registry of special forms for the toylisp evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
function application.
"""

from toylisp.types.symbol import Symbol
from toylisp.evaluation.special_forms.do_form import do_form
from toylisp.evaluation.special_forms.let_form import let_form
from toylisp.evaluation.special_forms.if_form import if_form
from toylisp.evaluation.special_forms.defn_form import defn_form
from toylisp.evaluation.special_forms.fn_form import fn_form

SPECIAL_FORMS = {
    Symbol("do"): do_form,
    Symbol("let"): let_form,
    Symbol("if"): if_form,
    Symbol("defn"): defn_form,
    Symbol("fn"): fn_form,
}
