# lazy_aad/aad/core/node.py
from dataclasses import dataclass
from typing import List, Tuple, Any

from ..differentials import AbstractThunk, extern

@dataclass
class Node:
    """
    One node on the tape produced by a primitive operation.

    Attributes
    ----------
    op_tag : str
        Debug tag (e.g., "add", "mul").
    out    : Any
        The ADVar produced by this op.
    parents: List[Tuple[Any, Any]]
        List of (parent_var, local_partial) pairs:
          - parent_var : the ADVar input that this node depends on
          - local_partial : ∂out/∂parent, either numeric (float/ndarray) or a
            Thunk that computes it. Thunks are only forced if the reverse
            sweep reaches a parent that requires grad.
    """
    op_tag: str
    out: Any
    parents: List[Tuple[Any, Any]]

    @property
    def deferred(self) -> int:
        """Number of local partials still held as thunks."""
        return sum(isinstance(a, AbstractThunk) for _, a in self.parents)

    def partial(self, idx: int) -> Any:
        """Fully forced ∂out/∂parents[idx]; re-runs a deferred partial each call."""
        return extern(self.parents[idx][1])
