# lazy_aad/aad/differentials/accumulate.py
from __future__ import annotations
import logging
from typing import Any

import numpy as np

from .abstract import extern
from .thunks import InplaceableThunk

logger = logging.getLogger(__name__)


def is_inplaceable(acc: Any) -> bool:
    """True if `acc` is an ndarray that can be updated in place."""
    return isinstance(acc, np.ndarray) and acc.flags.writeable


def accumulate(acc: Any, x: Any) -> Any:
    """
    Add differential `x` into accumulator `acc` and return the result.

    The result may or may not be `acc` itself, so always rebind:
        p.adj = accumulate(p.adj, contribution)

    Paths, in order of preference:
      1) `x` is an InplaceableThunk and `acc` a writeable ndarray:
         `x.accumulate(acc)`; `x` is never forced here.
      2) `acc` a writeable ndarray whose shape already holds the broadcast
         result: `acc += extern(x)`.
      3) anything else: `acc + extern(x)`.
    Shape/type compatibility in path 1 is the caller's responsibility.
    """
    if is_inplaceable(acc):
        if isinstance(x, InplaceableThunk):
            logger.debug("in-place accumulate via %r", x.add)
            return x.accumulate(acc)
        val = np.asarray(extern(x))
        if (np.broadcast_shapes(acc.shape, val.shape) == acc.shape
                and np.result_type(acc, val) == acc.dtype):
            acc += val
            return acc
        return acc + val
    return acc + extern(x)
