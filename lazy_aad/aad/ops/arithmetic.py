# lazy_aad/aad/ops/arithmetic.py
import numpy as np
from ..core.var import ADVar
from ..core import tape as tape_mod  # Use module access for use_tape() compatibility
from ..differentials import thunk

def _as_ad(x, requires_grad=False):
    """Ensure x is an ADVar; otherwise wrap it as a constant ADVar."""
    return x if isinstance(x, ADVar) else ADVar(x, requires_grad=requires_grad)

def _binary(x, y, f, dfdx, dfdy, tag):
    """
    Generic binary primitive:
      - computes out.val = f(x.val, y.val)
      - pushes a Node with local partials (∂out/∂x, ∂out/∂y)

    `dfdx` / `dfdy` are called now; they may return a Thunk to defer the
    actual partial until the reverse sweep needs it.
    """
    x = _as_ad(x, requires_grad=False)
    y = _as_ad(y, requires_grad=False)
    out = ADVar(f(x.val, y.val))
    tape_mod.global_tape.push_node(
        op_tag=tag, out=out,
        parents=[(x, dfdx(x.val, y.val)), (y, dfdy(x.val, y.val))]
    )
    return out

def _div_dfdy(a, b):
    return thunk(lambda: -a / np.square(b))

def add(x, y): return _binary(x, y, lambda a,b:a+b, lambda a,b:1.0,        lambda a,b:1.0,        "add")
def sub(x, y): return _binary(x, y, lambda a,b:a-b, lambda a,b:1.0,        lambda a,b:-1.0,       "sub")
def mul(x, y): return _binary(x, y, lambda a,b:a*b, lambda a,b:b,          lambda a,b:a,          "mul")
def div(x, y): return _binary(x, y, lambda a,b:a/b, lambda a,b:thunk(lambda: 1.0/b), _div_dfdy, "div")

def neg(x):
    """
    Unary negation:
      out.val = -x.val
    """
    x = _as_ad(x, requires_grad=False)
    out = ADVar(-x.val)
    tape_mod.global_tape.push_node(op_tag="neg", out=out, parents=[(x, -1.0)])
    return out

def pow(x, y):
    """
    Power (demo-level domain handling):
      out.val = x.val ** y.val

    Local partials (both deferred):
      ∂out/∂x = y * x^(y-1)
      ∂out/∂y = x^y * log(x)        (requires x>0; taken as 0 elsewhere)

    The common `x ** 2.0` with a constant exponent therefore never evaluates
    the log.
    """
    x = _as_ad(x, requires_grad=False)
    y = _as_ad(y, requires_grad=False)

    xv, pv = x.val, y.val
    out = ADVar(xv ** pv)
    yv = out.val

    @thunk
    def dfdx():
        return pv * (xv ** (pv - 1.0))

    @thunk
    def dfdy():
        return yv * (np.log(xv) if np.all(xv > 0) else 0.0)

    tape_mod.global_tape.push_node(op_tag="pow", out=out, parents=[(x, dfdx), (y, dfdy)])
    return out
