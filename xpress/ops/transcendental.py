# xpress/ops/transcendental.py
import numpy as np

from ..core.node import ZERO, ONE, as_expr, make_operation, is_zero, is_unit
from ..core.registry import Operator, register, same_shape, elementwise_rules, call_stream
from .arithmetic import mul, emul, pow


def exp(x):
    x = as_expr(x)
    if is_zero(x):
        return ONE
    return make_operation("exp", x)


def log(x):
    x = as_expr(x)
    if is_unit(x):
        return ZERO
    return make_operation("log", x)


def sqrt(x):
    x = as_expr(x)
    if is_zero(x) or is_unit(x):
        return x
    return make_operation("sqrt", x)


# d exp(a) = exp(a) a'
def _d_exp(ops, ds): return emul(exp(ops[0]), ds[0])

# d log(a) = a^-1 a'
def _d_log(ops, ds): return emul(pow(ops[0], -1), ds[0])

# d sqrt(a) = 0.5 a^-0.5 a'
def _d_sqrt(ops, ds): return emul(mul(0.5, pow(ops[0], -0.5)), ds[0])


register(Operator(
    tag="exp", symbol="exp", arity=1,
    rules=elementwise_rules(np.exp),
    shape_rule=same_shape, derivative=_d_exp, stream=call_stream("exp"),
    notation="function",
))

register(Operator(
    tag="log", symbol="log", arity=1,
    rules=elementwise_rules(np.log),
    shape_rule=same_shape, derivative=_d_log, stream=call_stream("log"),
    notation="function",
))

register(Operator(
    tag="sqrt", symbol="sqrt", arity=1,
    rules=elementwise_rules(np.sqrt),
    shape_rule=same_shape, derivative=_d_sqrt, stream=call_stream("sqrt"),
    notation="function",
))
