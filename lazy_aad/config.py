# lazy_aad/config.py
"""
Differential Configuration

Shared knobs for deferred differentials and the reverse sweep.
Values live on the class so every module sees the same settings;
`use_config` swaps them temporarily.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Optional


class DifferentialConfig:
    """Shared configuration for thunk resolution and adjoint accumulation

    Attributes:
        max_extern_depth: Maximum number of thunk layers `extern` may peel.
            None (default) imposes no limit; a thunk that returns itself
            then never resolves.
        inplace_accumulation: If True, `reverse` hands contributions to the
            adjoints as InplaceableThunks so array adjoints are updated in
            place. If False, every contribution is a plain Thunk and adjoints
            are rebuilt out of place.
    """

    max_extern_depth: Optional[int] = None
    inplace_accumulation: bool = True

    @staticmethod
    def snapshot() -> dict:
        """Return the current settings as a plain dict."""
        return {
            "max_extern_depth": DifferentialConfig.max_extern_depth,
            "inplace_accumulation": DifferentialConfig.inplace_accumulation,
        }


@contextmanager
def use_config(**overrides):
    """
    Context manager to temporarily override configuration:
        with use_config(max_extern_depth=8):
            ... extern(...) ...
    """
    previous = DifferentialConfig.snapshot()
    unknown = set(overrides) - set(previous)
    if unknown:
        raise TypeError(f"unknown configuration keys: {sorted(unknown)}")
    depth = overrides.get("max_extern_depth", previous["max_extern_depth"])
    if depth is not None and (not isinstance(depth, int) or depth < 0):
        raise ValueError("max_extern_depth must be a non-negative int or None")
    try:
        for key, val in overrides.items():
            setattr(DifferentialConfig, key, val)
        yield DifferentialConfig
    finally:
        for key, val in previous.items():
            setattr(DifferentialConfig, key, val)
