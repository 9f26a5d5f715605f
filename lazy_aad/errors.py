# lazy_aad/errors.py
"""Error types raised by lazy_aad itself.

Failures inside a wrapped computation are never wrapped: they reach the
caller of `unthunk` / `extern` unchanged.
"""


class AADError(Exception):
    """Base class for errors raised by the lazy_aad package."""


class DeferredResolutionDepthExceeded(AADError, RecursionError):
    """`extern` peeled more thunk layers than `DifferentialConfig.max_extern_depth` allows."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            f"deferred-resolution depth exceeded: more than {limit} nested thunks"
        )
