# xpress/core/__init__.py

"""
Core public API: the expression model and the engines that walk it.

Exports:
    Expression, Constant, Variable, Operation : tree nodes
    as_expr, make_operation                   : node construction
    Operator, Category, register, lookup      : operator registry
    derivative, gradient, hessian             : differentiation engine
    evaluate                                  : numeric evaluation under bindings
    render, write_to                          : printing engine
"""

from .registry import Operator, Category, register, lookup, registered, category_of
from .node import (
    Expression, Constant, Variable, Operation, ZERO, ONE,
    as_expr, make_operation, is_zero, is_unit, node_count, distinct_node_count, variables_of,
    static_shape, default_names,
)
from .engine import derivative, gradient, hessian
from .evaluate import evaluate
from .stream import render, write_to, format_value

__all__ = [
    "Operator", "Category", "register", "lookup", "registered", "category_of",
    "Expression", "Constant", "Variable", "Operation", "ZERO", "ONE",
    "as_expr", "make_operation", "is_zero", "is_unit", "node_count", "distinct_node_count", "variables_of",
    "static_shape", "default_names",
    "derivative", "gradient", "hessian",
    "evaluate",
    "render", "write_to", "format_value",
]
