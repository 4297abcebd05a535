# xpress/ops/__init__.py

# Importing the modules registers their operators
from . import arithmetic
from . import transcendental
from . import special

# Convenience re-exports so users can do: from xpress.ops import mul, exp, ...
from .arithmetic import add, sub, mul, emul, div, neg, pow
from .transcendental import exp, log, sqrt
from .special import erf, norm_cdf

__all__ = [
    "add", "sub", "mul", "emul", "div", "neg", "pow",
    "exp", "log", "sqrt",
    "erf", "norm_cdf",
]
