# xpress/core/engine.py
"""
Symbolic differentiation by structural recursion.

    d(Constant)      = 0
    d(Variable v)    = 1 if v is the target else 0
    d(Operation)     = operator.derivative(operands, [d(o) for o in operands])

Each operator owns its chain-rule identity; the engine only recurses.
Results are built with the same simplifying constructors as user code,
so zero terms vanish and unit factors drop out as they are produced.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Sequence

from .node import Expression, Constant, Variable, Operation, ZERO, ONE, as_expr, distinct_node_count
from ..errors import OperandCategoryError

logger = logging.getLogger(__name__)


def derivative(expr: Any, wrt: Variable) -> Expression:
    """
    d expr / d wrt.

    Args:
        expr: expression (plain numbers are treated as constants).
        wrt : the target Variable.

    Notes:
        - Sub-expressions shared within `expr` are differentiated once.
        - `expr` is never modified; a new tree is returned.
    """
    if not isinstance(wrt, Variable):
        raise TypeError(f"can only differentiate with respect to a Variable, got {type(wrt).__name__}")
    if wrt.shape.rank != 0:
        raise OperandCategoryError(
            f"can only differentiate with respect to a scalar Variable, got shape {wrt.shape}"
        )
    expr = as_expr(expr)
    memo: Dict[Expression, Expression] = {}

    def d(e: Expression) -> Expression:
        if e in memo:
            return memo[e]
        if isinstance(e, Constant):
            out = ZERO
        elif isinstance(e, Variable):
            out = ONE if e is wrt else ZERO
        elif isinstance(e, Operation):
            out = e.operator.derivative(e.operands, [d(o) for o in e.operands])
        else:
            raise TypeError(f"not an expression node: {type(e).__name__}")
        memo[e] = out
        return out

    result = d(expr)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("derivative wrt %s: %d nodes -> %d nodes",
                     wrt.name or wrt.uid, distinct_node_count(expr), distinct_node_count(result))
    return result


def gradient(expr: Any, variables: Sequence[Variable]) -> Dict[Variable, Expression]:
    """Partial derivatives of `expr` with respect to each variable, in input order."""
    return {v: derivative(expr, v) for v in variables}


def hessian(expr: Any, variables: Sequence[Variable]) -> List[List[Expression]]:
    """
    Matrix of second partials H[i][j] = d/dv_j (d expr / dv_i).

    First derivatives are computed once and reused for every row.
    """
    first = [derivative(expr, v) for v in variables]
    return [[derivative(di, vj) for vj in variables] for di in first]
