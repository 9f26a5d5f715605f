# lazy_aad/__init__.py
"""Reverse-mode AAD whose derivative contributions are deferred thunks."""

from .aad import *  # noqa: F401,F403
from .aad import __all__ as _aad_all
from .config import DifferentialConfig, use_config
from .errors import AADError, DeferredResolutionDepthExceeded

__all__ = list(_aad_all) + [
    "DifferentialConfig",
    "use_config",
    "AADError",
    "DeferredResolutionDepthExceeded",
]
