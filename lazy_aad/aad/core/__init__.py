# lazy_aad/aad/core/__init__.py

"""
Core public API for the AAD package.

Exports:
    ADVar          : The differentiable scalar/tensor wrapper used by the AAD system.
    Tape           : Records primitive ops; local partials may be deferred thunks.
    global_tape    : The default computation graph (tape) used to record ops.
    use_tape       : Context manager to temporarily switch the active tape.
    reverse        : Run a single reverse pass to accumulate first-order adjoints.
    zero_adjoints  : Reset all adjoints on the active tape to zero.
    grad           : Convenience: gradient of a single-input scalar function.
    grads          : Convenience: gradients w.r.t. a dict of inputs.
    grads_list     : Convenience: gradients w.r.t. a list of inputs.
    value          : Convenience: extract the primal value(s) from ADVar or thunk.
    summarize_tape : Tape statistics, including deferred partial counts.
"""

from .var import ADVar
from .tape import Tape, global_tape, use_tape
from .engine import reverse, zero_adjoints
from .seeds import grad, grads, grads_list, value
from .graph_utils import summarize_tape

__all__ = [
    "ADVar",
    "Tape", "global_tape", "use_tape",
    "reverse", "zero_adjoints",
    "grad", "grads", "grads_list", "value",
    "summarize_tape",
]
