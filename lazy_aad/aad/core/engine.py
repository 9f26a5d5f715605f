# lazy_aad/aad/core/engine.py
from __future__ import annotations
import logging
import numpy as np
from typing import Sequence, Union

from . import tape as tape_mod  # module access so use_tape() swaps are seen
from .var import ADVar
from ..differentials import (
    AbstractThunk,
    InplaceableThunk,
    Thunk,
    accumulate,
    is_inplaceable,
)
from ...config import DifferentialConfig

logger = logging.getLogger(__name__)

def zero_adjoints():
    """
    Set all adjoints (bar variables) on the current tape to zero.
    We scan the recorded nodes to find all reachable ADVars (outputs and parents)
    and zero their `.adj` fields.
    """
    seen = set()
    for node in tape_mod.global_tape.nodes:
        if id(node.out) not in seen:
            _zero(node.out); seen.add(id(node.out))
        for p, _ in node.parents:
            if id(p) not in seen:
                _zero(p); seen.add(id(p))

def _zero(v: ADVar):
    if isinstance(v.adj, np.ndarray) and v.adj.shape == np.shape(v.val):
        v.adj.fill(0.0)
    else:
        # an out-of-place accumulation may have widened the adjoint
        v.adj = np.zeros(np.shape(v.val), dtype=float)

def reverse(outputs: Union[ADVar, Sequence[ADVar]], seed=1.0):
    """
    Run a single reverse pass from the given output(s).

    Args:
        outputs: an ADVar or a (list/tuple) of ADVars to seed.
        seed: scalar or same-shaped array used as the adjoint seed. If `outputs`
              is a sequence, each output is seeded with 1.0 (the `seed` arg is
              ignored in that case).

    Notes:
        - For each node, we propagate: p.adj += y.adj * (∂y/∂p).
        - Parents with requires_grad=False are skipped before their local
          partial is looked at, so a deferred partial for a constant is
          never computed.
        - Each contribution is handed to `accumulate` as a thunk. When the
          parent's adjoint can hold the result, it is an InplaceableThunk
          that writes straight into the adjoint buffer. With
          DifferentialConfig.inplace_accumulation off, adjoints are
          rebuilt out of place instead.
        - NumPy broadcasting is allowed when shapes are compatible.
    """
    # Seed adjoints
    if isinstance(outputs, (list, tuple)):
        for y in outputs:
            _seed(y, 1.0)
    else:
        _seed(outputs, seed)

    inplace = DifferentialConfig.inplace_accumulation
    tape = tape_mod.global_tape
    n_forced = 0
    scratch = {}

    # Backward sweep
    for node in reversed(tape.nodes):
        y = node.out
        if _is_zero(y.adj):
            continue  # nothing to propagate
        for idx, (p, local_partial) in enumerate(node.parents):
            if not p.requires_grad:
                continue
            if isinstance(local_partial, AbstractThunk):
                n_forced += 1
            contribution = _contribution(y.adj, node.partial(idx), p.adj, scratch)
            if inplace:
                p.adj = accumulate(p.adj, contribution)
            else:
                # generic algebra: forces the thunk, drops the in-place add
                p.adj = p.adj + contribution

    logger.debug(
        "reverse: %d nodes, forced %d of %d deferred partials (inplace=%s)",
        len(tape.nodes), n_forced, tape.deferred_partials, inplace,
    )

def _contribution(ybar, a, acc, scratch: dict):
    """Deferred `ybar * a`; in-place capable when `acc` already has the result's shape."""
    val = Thunk(lambda: ybar * a)
    if not is_inplaceable(acc):
        return val
    if np.broadcast_shapes(acc.shape, np.shape(ybar), np.shape(a)) != acc.shape:
        return val
    return InplaceableThunk(val, lambda buf: _scaled_add(buf, ybar, a, scratch))

def _scaled_add(buf: np.ndarray, ybar, a, scratch: dict):
    """
    buf += ybar * a without allocating per call.

    The ±1 partials of linear ops skip the product. Otherwise the product
    goes into a scratch array from `scratch`, keyed by (shape, dtype) and
    reused for the whole sweep. Only a product whose dtype differs from
    `buf` (e.g. complex partials) still materialises a temporary.
    """
    if np.isscalar(a) and a == 1.0:
        np.add(buf, ybar, out=buf)
    elif np.isscalar(a) and a == -1.0:
        np.subtract(buf, ybar, out=buf)
    elif np.result_type(ybar, a) == buf.dtype:
        key = (buf.shape, buf.dtype)
        tmp = scratch.get(key)
        if tmp is None:
            tmp = scratch[key] = np.empty_like(buf)
        np.multiply(ybar, a, out=tmp)
        np.add(buf, tmp, out=buf)
    else:
        buf += ybar * a
    return buf

def _seed(v: ADVar, seed):
    if isinstance(v.adj, np.ndarray):
        v.adj += np.ones_like(v.val, dtype=float) * seed
    else:
        v.adj += float(seed)

def _is_zero(x):
    try:
        return (x == 0).all()
    except Exception:
        return x == 0
