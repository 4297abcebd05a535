# xpress/__init__.py
# Symbolic expressions over scalars and tensors: construction with
# simplification, differentiation, evaluation and rendering

import logging

from .errors import (
    XpressError, ShapeMismatchError, OperandCategoryError,
    UnboundVariableError, UnknownOperatorError,
)
from .config import EngineConfig, get_config, use_config, configure_logging

from .linalg import (
    Shape, MultiIndexRange, Tensor, tensor,
    rank, count, flatten, unflatten, equal, enumerate_indices,
    Access, register_access, is_tensorial, shape_of, get_at, set_at,
)
from .core import (
    Expression, Constant, Variable, Operation,
    Operator, Category, register, lookup, registered,
    derivative, gradient, hessian, evaluate, render, write_to,
    node_count, variables_of, static_shape,
)

# Operator catalogue (registration happens on import)
from . import ops
from .ops import add, sub, mul, emul, div, neg, pow, exp, log, sqrt, erf, norm_cdf

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Errors
    "XpressError", "ShapeMismatchError", "OperandCategoryError",
    "UnboundVariableError", "UnknownOperatorError",
    # Config
    "EngineConfig", "get_config", "use_config", "configure_logging",
    # Linear algebra
    "Shape", "MultiIndexRange", "Tensor", "tensor",
    "rank", "count", "flatten", "unflatten", "equal", "enumerate_indices",
    "Access", "register_access", "is_tensorial", "shape_of", "get_at", "set_at",
    # Expressions
    "Expression", "Constant", "Variable", "Operation",
    "Operator", "Category", "register", "lookup", "registered",
    "derivative", "gradient", "hessian", "evaluate", "render", "write_to",
    "node_count", "variables_of", "static_shape",
    # Operators
    "ops",
    "add", "sub", "mul", "emul", "div", "neg", "pow",
    "exp", "log", "sqrt", "erf", "norm_cdf",
]
