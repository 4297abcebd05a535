# xpress/core/evaluate.py
from __future__ import annotations
from typing import Any, Dict, Mapping

from .node import Expression, Constant, Variable, Operation, as_expr
from ..errors import ShapeMismatchError, UnboundVariableError
from ..linalg.access import is_scalar, is_tensorial, shape_of
from ..linalg.tensor import Tensor


def evaluate(expr: Any, bindings: Mapping[Variable, Any]) -> Any:
    """
    Value of `expr` with each variable replaced by its binding.

    Bindings may hold scalars, Tensors, nested lists or ndarrays; tensor
    results are always returned as Tensor. Shared sub-expressions are
    evaluated once.
    """
    memo: Dict[Expression, Any] = {}

    def _eval(e: Expression):
        if e in memo:
            return memo[e]
        if isinstance(e, Constant):
            out = e.value
        elif isinstance(e, Variable):
            if e not in bindings:
                raise UnboundVariableError(e)
            out = _check_binding(e, bindings[e])
        elif isinstance(e, Operation):
            out = e.operator.evaluate(*(_eval(o) for o in e.operands))
        else:
            raise TypeError(f"not an expression node: {type(e).__name__}")
        memo[e] = out
        return out

    return _eval(as_expr(expr))


def _check_binding(var: Variable, value):
    """Bound values must agree with the variable's declared shape."""
    if var.shape.rank == 0:
        if not is_scalar(value):
            raise ShapeMismatchError(
                f"variable {var.name or var.uid} is scalar, bound to {type(value).__name__}",
                expected=var.shape, actual=shape_of(value) if is_tensorial(value) else None,
            )
        return value
    actual = shape_of(value)
    if actual != var.shape:
        raise ShapeMismatchError(
            f"variable {var.name or var.uid} has shape {var.shape}, bound value has {actual}",
            expected=var.shape, actual=actual,
        )
    return value if isinstance(value, Tensor) else Tensor.from_values(value)
