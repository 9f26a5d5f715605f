# lazy_aad/aad/core/tape.py
from __future__ import annotations
from typing import List, Tuple, Optional
from contextlib import contextmanager
from .node import Node

class Tape:
    """
    A simple global tape: records Nodes in forward order.

    Attributes
    ----------
    nodes : List[Node]
        Recorded primitive ops, oldest first.
    deferred_partials : int
        Local partials recorded as thunks so far; counted on push so the
        reverse sweep and `summarize_tape` need no extra scan.
    """
    def __init__(self):
        self.nodes: List[Node] = []
        self.deferred_partials = 0

    def reset(self):
        self.nodes.clear()
        self.deferred_partials = 0

    def push_node(self, *, op_tag: str, out, parents: List[Tuple]):
        """
        Append a Node(op_tag, out, parents) to the tape and return its index.
        `parents` is a list of (parent_ADVar, local_partial) where the partial
        is numeric or a Thunk; the thunk is not forced here.
        """
        node = Node(op_tag=op_tag, out=out, parents=parents)
        self.nodes.append(node)
        self.deferred_partials += node.deferred
        return len(self.nodes) - 1

    def __len__(self):
        return len(self.nodes)

# Global singleton tape
global_tape = Tape()

@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily use a fresh tape:
        with use_tape():
            ... build computation ...
            reverse(y)
    """
    from . import tape as _tape_mod  # local import to avoid cycles
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
