# lazy_aad/aad/__init__.py
# Automatic Adjoint Differentiation with deferred differentials

from .differentials import (
    AbstractDifferential,
    AbstractThunk,
    Thunk,
    InplaceableThunk,
    thunk,
    unthunk,
    extern,
    conj,
    broadcastable,
    accumulate,
)
from .core.var import ADVar
from .core.tape import Tape, global_tape, use_tape
from .core.engine import reverse, zero_adjoints
from .core.seeds import grad, grads, grads_list, value
from .core.graph_utils import summarize_tape
from . import ops

__all__ = [
    # Differentials
    'AbstractDifferential',
    'AbstractThunk',
    'Thunk',
    'InplaceableThunk',
    'thunk',
    'unthunk',
    'extern',
    'conj',
    'broadcastable',
    'accumulate',
    # Core
    'ADVar',
    'Tape',
    'global_tape',
    'use_tape',
    # Engine
    'reverse',
    'zero_adjoints',
    'grad',
    'grads',
    'grads_list',
    'value',
    'summarize_tape',
    'ops',
]
