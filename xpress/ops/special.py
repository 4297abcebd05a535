# xpress/ops/special.py
import numpy as np
from scipy.special import erf as scipy_erf, ndtr

from ..core.node import as_expr, make_operation
from ..core.registry import Operator, register, same_shape, elementwise_rules, call_stream
from .arithmetic import mul, emul, neg, pow
from .transcendental import exp

TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)
INV_SQRT_TWO_PI = 1.0 / np.sqrt(2.0 * np.pi)


def erf(x):
    """
    Error function: erf(x) = (2/√π) ∫₀ˣ e^(-t²) dt

    Derivative: d/dx erf(x) = (2/√π) * e^(-x²)
    """
    return make_operation("erf", as_expr(x))


def norm_cdf(x):
    """Standard normal CDF N(x); derivative is the density φ(x) = e^(-x²/2)/√(2π)."""
    return make_operation("norm_cdf", as_expr(x))


def _d_erf(ops, ds):
    return emul(mul(TWO_OVER_SQRT_PI, exp(neg(pow(ops[0], 2)))), ds[0])


def _d_norm_cdf(ops, ds):
    return emul(mul(INV_SQRT_TWO_PI, exp(mul(-0.5, pow(ops[0], 2)))), ds[0])


register(Operator(
    tag="erf", symbol="erf", arity=1,
    rules=elementwise_rules(scipy_erf),
    shape_rule=same_shape, derivative=_d_erf, stream=call_stream("erf"),
    notation="function",
))

register(Operator(
    tag="norm_cdf", symbol="N", arity=1,
    rules=elementwise_rules(ndtr),
    shape_rule=same_shape, derivative=_d_norm_cdf, stream=call_stream("N"),
    notation="function",
))
