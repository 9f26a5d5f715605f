# lazy_aad/aad/differentials/arithmetic.py
#-----------------------------------------------------------------------------
# Generic algebra on thunks: force one layer, then let the forced value's own
# arithmetic take over. An InplaceableThunk loses its in-place path here.
#-----------------------------------------------------------------------------
from .abstract import AbstractThunk, unthunk


def add(a, b): return unthunk(a) + unthunk(b)
def sub(a, b): return unthunk(a) - unthunk(b)
def mul(a, b): return unthunk(a) * unthunk(b)
def div(a, b): return unthunk(a) / unthunk(b)

def neg(a):
    return -unthunk(a)

# Bind Python operators to AbstractThunk
AbstractThunk.__add__      = lambda self, other: add(self, other)
AbstractThunk.__radd__     = lambda self, other: add(other, self)
AbstractThunk.__sub__      = lambda self, other: sub(self, other)
AbstractThunk.__rsub__     = lambda self, other: sub(other, self)
AbstractThunk.__mul__      = lambda self, other: mul(self, other)
AbstractThunk.__rmul__     = lambda self, other: mul(other, self)
AbstractThunk.__truediv__  = lambda self, other: div(self, other)
AbstractThunk.__rtruediv__ = lambda self, other: div(other, self)
AbstractThunk.__neg__      = lambda self: neg(self)
