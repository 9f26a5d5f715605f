# lazy_aad/aad/differentials/__init__.py

"""
Deferred differentials.

A thunk stands in for a derivative contribution that may never be consumed;
it is only computed when forced.

Exports:
    AbstractDifferential : Minimal differential interface (`unthunk`).
    AbstractThunk        : Base class of every deferred differential.
    Thunk                : Deferred zero-argument computation, not memoised.
    InplaceableThunk     : Thunk plus an in-place `add` for accumulators.
    thunk                : Build a Thunk from a callable (also a decorator).
    unthunk              : Remove one layer of deferral (identity otherwise).
    extern               : Remove every layer of deferral.
    conj                 : Complex conjugate, lazy on thunks.
    broadcastable        : Fully resolved, NumPy-ready value.
    accumulate           : Add a differential into an accumulator.
"""

from .abstract import (
    AbstractDifferential,
    AbstractThunk,
    ThunkIterator,
    unthunk,
    extern,
    conj,
    broadcastable,
)
from .thunks import Thunk, InplaceableThunk, thunk
from .accumulate import accumulate, is_inplaceable

# Ensure operator overloading is registered
from . import arithmetic

__all__ = [
    "AbstractDifferential", "AbstractThunk", "ThunkIterator",
    "Thunk", "InplaceableThunk", "thunk",
    "unthunk", "extern", "conj", "broadcastable",
    "accumulate", "is_inplaceable",
]
