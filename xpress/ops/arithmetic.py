# xpress/ops/arithmetic.py
import numbers
import operator as _op

import numpy as np

from ..core.node import (
    ZERO, ONE, as_expr, make_operation, is_zero, is_unit, is_operation, node_count,
)
from ..core.registry import (
    Operator, register, S, T,
    matching_shapes, broadcast_shape, contraction_shape, same_shape, elementwise_rules,
)
from ..linalg.algebra import zip_elements, broadcast, contract

# ---------------------------------------------------------------------------
# Construction functions: identity rules first, an Operation node only when
# none applies. pow keeps the check order zero-base, unit, zero-exponent,
# so pow(0, 0) is 0.
# ---------------------------------------------------------------------------

def add(a, b):
    a, b = as_expr(a), as_expr(b)
    if is_zero(a):
        return b
    if is_zero(b):
        return a
    if a == b:
        return mul(2, a)
    return make_operation("add", a, b)


def sub(a, b):
    a, b = as_expr(a), as_expr(b)
    if is_zero(b):
        return a
    if is_zero(a):
        return neg(b)
    if a == b:
        return ZERO
    return make_operation("sub", a, b)


def mul(a, b):
    """Scalar product, tensor-scalar broadcast, or full contraction of two tensors."""
    a, b = as_expr(a), as_expr(b)
    if is_zero(a) or is_zero(b):
        return ZERO
    if is_unit(a):
        return b
    if is_unit(b):
        return a
    if a == b and a.shape.rank == 0:
        return pow(a, 2)
    return make_operation("mul", a, b)


def emul(a, b):
    """Elementwise product; the same as mul unless both operands are tensors."""
    a, b = as_expr(a), as_expr(b)
    if a.shape.rank == 0 or b.shape.rank == 0:
        return mul(a, b)
    return make_operation("emul", a, b)


def div(a, b):
    a, b = as_expr(a), as_expr(b)
    if is_zero(a):
        return ZERO
    if is_unit(b):
        return a
    if a == b:
        return ONE
    return make_operation("div", a, b)


def neg(a):
    a = as_expr(a)
    if is_zero(a):
        return a
    if is_operation(a, "neg"):
        return a.operands[0]
    return make_operation("neg", a)


def pow(a, b):
    a, b = as_expr(a), as_expr(b)
    if is_zero(a):
        return ZERO
    if is_unit(a) or is_unit(b):
        return a
    if is_zero(b):
        return ONE
    return make_operation("pow", a, b)


# ---------------------------------------------------------------------------
# Scalar kernels
# ---------------------------------------------------------------------------

def _pow_scalar(base, exponent):
    # exact integer powers stay integral; everything else is the real power
    if isinstance(exponent, numbers.Integral) and exponent >= 0:
        return base ** exponent
    return np.power(float(base), exponent)


# ---------------------------------------------------------------------------
# Derivative rules: (operands, operand derivatives) -> expression
# ---------------------------------------------------------------------------

def _d_add(ops, ds): return add(ds[0], ds[1])
def _d_sub(ops, ds): return sub(ds[0], ds[1])
def _d_neg(ops, ds): return neg(ds[0])


def _d_mul(ops, ds):
    (a, b), (da, db) = ops, ds
    return add(mul(da, b), mul(a, db))


def _d_emul(ops, ds):
    (a, b), (da, db) = ops, ds
    return add(emul(da, b), emul(a, db))


def _d_div(ops, ds):
    # (a'b - ab') / b^2
    (a, b), (da, db) = ops, ds
    return div(sub(mul(da, b), mul(a, db)), pow(b, 2))


def _d_pow(ops, ds):
    # b*a^(b-1)*a' + a^b*log(a)*b'
    from .transcendental import log
    (a, b), (da, db) = ops, ds
    power_term = emul(mul(b, pow(a, sub(b, 1))), da)
    exponential_term = emul(emul(pow(a, b), log(a)), db)
    return add(power_term, exponential_term)


# ---------------------------------------------------------------------------
# Print rules: each decides locally which operands need parentheses
# ---------------------------------------------------------------------------

def _write_operand(out, write, e, grouped):
    if grouped:
        out.write("(")
        write(e)
        out.write(")")
    else:
        write(e)


def _tagged(e, *tags):
    return any(is_operation(e, t) for t in tags)


def _infix(symbol, left_grouped, right_grouped):
    def stream(out, operands, write):
        a, b = operands
        _write_operand(out, write, a, left_grouped(a))
        out.write(symbol)
        _write_operand(out, write, b, right_grouped(b))
    return stream


def _never(e):
    return False


def _is_sum(e):
    return _tagged(e, "add", "sub")


def _is_signed(e):
    return _tagged(e, "add", "sub", "neg")


def _is_compound(e):
    return node_count(e) > 1 and e.operator.notation != "function"


def _stream_neg(out, operands, write):
    out.write("-")
    _write_operand(out, write, operands[0], _is_sum(operands[0]))


def _stream_pow(out, operands, write):
    base, exponent = operands
    _write_operand(out, write, base, _is_compound(base))
    out.write("^")
    # the exponent is grouped whenever it is not a single leaf: x^(a + b)
    _write_operand(out, write, exponent, node_count(exponent) > 1)


register(Operator(
    tag="add", symbol="+", arity=2,
    rules={
        (S, S): _op.add,
        (T, T): lambda a, b: zip_elements(_op.add, a, b, "addition operands"),
    },
    shape_rule=matching_shapes,
    derivative=_d_add,
    stream=_infix(" + ", _never, _never),
    commutative=True,
))

register(Operator(
    tag="sub", symbol="-", arity=2,
    rules={
        (S, S): _op.sub,
        (T, T): lambda a, b: zip_elements(_op.sub, a, b, "subtraction operands"),
    },
    shape_rule=matching_shapes,
    derivative=_d_sub,
    stream=_infix(" - ", _never, _is_signed),
))

register(Operator(
    tag="mul", symbol="*", arity=2,
    rules={
        (S, S): _op.mul,
        (T, S): lambda t, s: broadcast(_op.mul, t, s),
        (T, T): contract,
    },
    shape_rule=contraction_shape,
    derivative=_d_mul,
    stream=_infix("*", _is_sum, _is_signed),
    commutative=True,
))

register(Operator(
    tag="emul", symbol="∘", arity=2,
    rules={
        (S, S): _op.mul,
        (T, S): lambda t, s: broadcast(_op.mul, t, s),
        (T, T): lambda a, b: zip_elements(_op.mul, a, b, "elementwise product operands"),
    },
    shape_rule=broadcast_shape,
    derivative=_d_emul,
    stream=_infix("∘", _is_sum, _is_signed),
    commutative=True,
))

register(Operator(
    tag="div", symbol="/", arity=2,
    rules={
        (S, S): _op.truediv,
        (T, S): lambda t, s: broadcast(_op.truediv, t, s),
    },
    shape_rule=broadcast_shape,
    derivative=_d_div,
    stream=_infix("/", _is_sum, _is_compound),
))

register(Operator(
    tag="neg", symbol="-", arity=1,
    rules=elementwise_rules(_op.neg),
    shape_rule=same_shape,
    derivative=_d_neg,
    stream=_stream_neg,
    notation="prefix",
))

register(Operator(
    tag="pow", symbol="^", arity=2,
    rules={
        (S, S): _pow_scalar,
        (T, S): lambda t, e: broadcast(_pow_scalar, t, e),
    },
    shape_rule=broadcast_shape,
    derivative=_d_pow,
    stream=_stream_pow,
))
