"""Registry of special forms for the Korisp evaluator.

Maps head symbol names to handlers that implement non-standard evaluation
rules. The interpreter consults this table before evaluating the head of a
call expression, so these names cannot be shadowed by user bindings.

Every handler has the signature `(location, interpreter, nodes) -> Node` and
receives the raw, unevaluated argument nodes.
"""

from korisp import SpecialFormImpl
from korisp.evaluation.special_forms.quote_forms import (
    quote_form,
    quasiquote_form,
    unquote_form,
    splice_form,
)
from korisp.evaluation.special_forms.if_form import if_form
from korisp.evaluation.special_forms.do_forms import do_form, while_form
from korisp.evaluation.special_forms.define_forms import def_form, var_form, set_form
from korisp.evaluation.special_forms.fn_forms import fn_form, macro_form

SPECIAL_FORMS: dict[str, SpecialFormImpl] = {
    "quote": quote_form,
    "quasiquote": quasiquote_form,
    "unquote": unquote_form,
    "splice": splice_form,
    "if": if_form,
    "do": do_form,
    "while": while_form,
    "def": def_form,
    "var": var_form,
    "set": set_form,
    "fn": fn_form,
    "macro": macro_form,
}
