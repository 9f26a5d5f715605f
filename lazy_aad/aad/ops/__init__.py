# lazy_aad/aad/ops/__init__.py

# Convenience re-exports so users can do: from lazy_aad.aad.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow
from .transcendental import exp, log, sqrt, erf, norm_cdf

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow",
    "exp", "log", "sqrt", "erf",
    "norm_cdf",
]
