# lazy_aad/aad/differentials/abstract.py
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterator

import numpy as np

from ...config import DifferentialConfig
from ...errors import DeferredResolutionDepthExceeded

logger = logging.getLogger(__name__)


class AbstractDifferential(ABC):
    """
    Minimal interface for values that stand for a derivative contribution.

    The only thing the rest of the package relies on is `unthunk()`, which
    returns the value with one layer of deferral removed.
    """

    @abstractmethod
    def unthunk(self) -> Any:
        ...


class AbstractThunk(AbstractDifferential):
    """
    A differential whose value is only computed when it is forced.

    Everything generic (iteration, numpy broadcasting, conjugation and the
    arithmetic bound in `differentials.arithmetic`) forces the thunk first,
    so any subclass only needs to implement `unthunk`.
    """

    # ensures NumPy binary ops defer to __array_ufunc__ below
    __array_priority__ = 1000

    def __iter__(self) -> "ThunkIterator":
        return ThunkIterator(self.unthunk())

    def conj(self) -> AbstractThunk:
        """Lazy complex conjugate: nothing is forced until the result is."""
        from .thunks import Thunk  # local import to avoid cycles
        return Thunk(lambda: np.conj(self.unthunk()))

    conjugate = conj

    def __array__(self, dtype=None, copy=None):
        val = extern(self)
        if copy:
            return np.array(val, dtype=dtype, copy=True)
        arr = np.asarray(val, dtype=dtype)
        if copy is False and arr is not val:
            raise ValueError("forced thunk value cannot be viewed as an array without a copy")
        return arr

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        inputs = tuple(extern(x) for x in inputs)
        if "out" in kwargs:
            kwargs["out"] = tuple(extern(x) for x in kwargs["out"])
        return getattr(ufunc, method)(*inputs, **kwargs)


class ThunkIterator:
    """
    Iteration state for a forced thunk.

    Attributes
    ----------
    value : Any
        The forced value being iterated; kept so later steps never re-force.
    state : Iterator
        The forced value's own iterator.
    """

    def __init__(self, value: Any):
        self.value = value
        self.state: Iterator = iter(value)

    def __iter__(self):
        return self

    def __next__(self):
        return next(self.state)


def unthunk(x: Any) -> Any:
    """
    On thunks, remove one layer of deferral; on any other value, the identity.

    In contrast to `extern` this is not recursive.
    """
    return x.unthunk() if isinstance(x, AbstractThunk) else x


def extern(x: Any) -> Any:
    """
    Force `x` repeatedly until the result is no longer a thunk.

    Layers are peeled in a loop, so long finite chains need no stack.
    No cycle detection is performed: a thunk that returns itself never
    resolves. Set `DifferentialConfig.max_extern_depth` to fail with
    DeferredResolutionDepthExceeded instead.
    """
    limit = DifferentialConfig.max_extern_depth
    depth = 0
    while isinstance(x, AbstractThunk):
        if limit is not None and depth >= limit:
            logger.debug("extern gave up after %d nested thunks", depth)
            raise DeferredResolutionDepthExceeded(limit)
        x = x.unthunk()
        depth += 1
    return x


def conj(x: Any) -> Any:
    """Complex conjugate that stays lazy on thunks."""
    return x.conj() if isinstance(x, AbstractThunk) else np.conj(x)


def broadcastable(x: Any) -> Any:
    """Fully resolve `x` into something NumPy broadcasting accepts directly."""
    val = extern(x)
    if isinstance(val, np.ndarray) or np.isscalar(val):
        return val
    return np.asarray(val)
