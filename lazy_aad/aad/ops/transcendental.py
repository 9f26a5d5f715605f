# lazy_aad/aad/ops/transcendental.py
import numpy as np
from scipy.special import erf as scipy_erf

from ..core.var import ADVar
from ..core import tape as tape_mod  # Use module access for use_tape() compatibility
from ..differentials import thunk
from .arithmetic import _as_ad

SQRT_TWO_PI = np.sqrt(2.0 * np.pi)

def norm_pdf(x):
    return np.exp(-0.5 * x * x) / SQRT_TWO_PI

def exp(x):
    x = _as_ad(x, requires_grad=False)
    ex = np.exp(x.val)
    out = ADVar(ex)
    # the partial is the value itself, nothing to defer
    tape_mod.global_tape.push_node(op_tag="exp", out=out, parents=[(x, ex)])
    return out

def log(x):
    x = _as_ad(x, requires_grad=False)
    xv = x.val
    out = ADVar(np.log(xv))
    tape_mod.global_tape.push_node(op_tag="log", out=out, parents=[(x, thunk(lambda: 1.0 / xv))])
    return out

def sqrt(x):
    x = _as_ad(x, requires_grad=False)
    s = np.sqrt(x.val)
    out = ADVar(s)
    tape_mod.global_tape.push_node(op_tag="sqrt", out=out, parents=[(x, thunk(lambda: 0.5 / s))])
    return out

def erf(x):
    """
    Error function: erf(x) = (2/√π) ∫₀ˣ e^(-t²) dt

    Derivative: d/dx erf(x) = (2/√π) * e^(-x²)
    """
    x = _as_ad(x, requires_grad=False)
    xv = x.val
    out = ADVar(scipy_erf(xv))

    @thunk
    def deriv():
        return (2.0 / np.sqrt(np.pi)) * np.exp(-xv ** 2)

    tape_mod.global_tape.push_node(op_tag="erf", out=out, parents=[(x, deriv)])
    return out

def norm_cdf(x):
    """
    Primitive: returns N(x) = 0.5 * (1 + erf(x / √2)) and records the
    deferred local partial dN/dx = phi(x).
    """
    x = _as_ad(x, requires_grad=False)
    xv = x.val
    out = ADVar(0.5 * (1.0 + scipy_erf(xv / np.sqrt(2.0))))
    tape_mod.global_tape.push_node(
        op_tag="norm_cdf", out=out, parents=[(x, thunk(lambda: norm_pdf(xv)))]
    )
    return out
