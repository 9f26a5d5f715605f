# lazy_aad/aad/core/graph_utils.py
"""
Tape statistics: size, fan-in, operation mix, and how many local partials
were recorded as deferred thunks.
"""

import logging
from collections import Counter
from typing import Dict, Optional

import numpy as np

from . import tape as tape_mod

logger = logging.getLogger(__name__)


def summarize_tape(tape: Optional[tape_mod.Tape] = None) -> Dict:
    """
    Collect statistics for `tape` (default: the active tape) and log them at
    DEBUG level.

    Returns:
        dict with keys nodes, edges, max_fan_in, avg_fan_in, operations,
        deferred_partials.
    """
    tape = tape if tape is not None else tape_mod.global_tape
    if not tape.nodes:
        return {
            'nodes': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'operations': {},
            'deferred_partials': 0,
        }

    fan_ins = [len(node.parents) for node in tape.nodes]
    deferred = tape.deferred_partials
    op_counter = Counter(node.op_tag for node in tape.nodes)

    stats = {
        'nodes': len(tape.nodes),
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'operations': dict(op_counter),
        'deferred_partials': deferred,
    }
    logger.debug(
        "tape: %d nodes, %d edges, %d deferred partials, ops=%s",
        stats['nodes'], stats['edges'], deferred, stats['operations'],
    )
    return stats
