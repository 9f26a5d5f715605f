# lazy_aad/aad/core/var.py
from __future__ import annotations
import numpy as np
from typing import Any, Optional

class ADVar:
    """
    Active variable for reverse-mode Automatic Differentiation (AD).

    Attributes
    ----------
    val : float | np.ndarray
        Forward (primal) value of this variable.
    adj : float | np.ndarray
        Reverse-mode adjoint (gradient accumulator); same shape as val.
        Array adjoints are updated in place by the reverse sweep.
    requires_grad : bool
        Whether this variable participates in differentiation. If False,
        the reverse sweep skips it and never forces its local partials.
    name : Optional[str]
        Optional debug/pretty-print name.
    """

    __array_priority__ = 1000  # ndarray (op) ADVar dispatches to ADVar's reflected ops

    def __init__(self, val: Any, *, requires_grad: bool = True, name: Optional[str] = None):
        # Type check: only allow numeric scalars, sequences, or numpy arrays
        if not isinstance(val, (int, float, np.number, list, tuple, np.ndarray)):
            raise TypeError(
                f"ADVar only accepts numeric types (int, float, list, tuple, ndarray), "
                f"but got {type(val)}"
            )

        # list/tuple/ndarray -> float64 array, scalars -> float64 scalar
        if isinstance(val, (list, tuple, np.ndarray)):
            self.val = np.asarray(val, dtype=np.float64)
        else:
            self.val = np.float64(val)

        # Gradient accumulator, always an ndarray so it can be updated in place
        self.adj = np.zeros(np.shape(self.val), dtype=float)

        self.requires_grad = requires_grad
        self.name = name

    def __repr__(self):
        rg = "req" if self.requires_grad else "const"
        return f"ADVar({self.val!r}, {rg}, name={self.name!r})"

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)
