# xpress/linalg/algebra.py
"""
Generic elementwise kernels over any tensor-eligible values.

Every operator's tensor rule is written once here in terms of
`Shape.indices()` and the access layer, so nested lists, ndarrays and
Tensors all participate without conversion. Results are always fresh
`Tensor` objects; operands are never written to.
"""
from __future__ import annotations
from typing import Any, Callable

from .access import access_for, shape_of
from .shape import Shape
from .tensor import Tensor
from ..errors import ShapeMismatchError


def require_same_shape(a: Shape, b: Shape, what: str = "operands") -> Shape:
    if a != b:
        raise ShapeMismatchError(f"{what} have shapes {a} and {b}", expected=a, actual=b)
    return a


def map_elements(fn: Callable[[Any], Any], t) -> Tensor:
    """fn applied to every element of `t`; result has t's shape."""
    adapter = access_for(t)
    shape = shape_of(t)
    return Tensor.build(shape, lambda idx: fn(adapter.get(t, idx)))


def broadcast(fn: Callable[[Any, Any], Any], t, scalar) -> Tensor:
    """fn(element, scalar) for every element of `t`."""
    return map_elements(lambda e: fn(e, scalar), t)


def zip_elements(fn: Callable[[Any, Any], Any], a, b, what: str = "operands") -> Tensor:
    """fn(a[idx], b[idx]) over two equally shaped values."""
    shape = require_same_shape(shape_of(a), shape_of(b), what)
    get_a, get_b = access_for(a).get, access_for(b).get
    return Tensor.build(shape, lambda idx: fn(get_a(a, idx), get_b(b, idx)))


def contract(a, b):
    """Full contraction sum_idx a[idx]*b[idx]; shapes must match."""
    shape = require_same_shape(shape_of(a), shape_of(b), "contraction operands")
    get_a, get_b = access_for(a).get, access_for(b).get
    result = 0
    for idx in shape.indices():
        result = result + get_a(a, idx) * get_b(b, idx)
    return result
