# xpress/core/node.py
"""
Expression tree nodes.

    Constant   : fixed scalar or Tensor value
    Variable   : identity-only leaf, optionally with a declared shape
    Operation  : operator tag plus one or two operand sub-expressions

Nodes are immutable, so sub-expressions are freely shared between parents
(`x*x` holds the same Variable twice). Operations are compared
structurally; variables by identity.
"""
from __future__ import annotations
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .registry import lookup
from ..config import get_config
from ..errors import OperandCategoryError
from ..linalg.access import is_scalar, is_tensorial
from ..linalg.shape import Shape, SCALAR, as_shape
from ..linalg.tensor import Tensor

logger = logging.getLogger(__name__)


class Expression:
    """Base of all nodes. Python operators route through the simplifying constructors."""
    __slots__ = ()

    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)

    @property
    def shape(self) -> Shape:
        raise NotImplementedError

    def derivative(self, wrt: "Variable") -> "Expression":
        from .engine import derivative
        return derivative(self, wrt)

    def evaluate(self, bindings) -> Any:
        from .evaluate import evaluate
        return evaluate(self, bindings)

    def __str__(self):
        from .stream import render
        return render(self, default_names(self))


@dataclass(frozen=True, eq=False)
class Constant(Expression):
    value: Any

    def __post_init__(self):
        value = self.value
        if isinstance(value, Tensor):
            return
        if is_scalar(value):
            if isinstance(value, np.ndarray):
                value = value.item()
        elif is_tensorial(value):
            value = Tensor.from_values(value)
        else:
            raise OperandCategoryError(f"cannot make a constant from {type(value).__name__}")
        object.__setattr__(self, "value", value)

    @property
    def shape(self) -> Shape:
        return self.value.shape if isinstance(self.value, Tensor) else SCALAR

    def __eq__(self, other):
        if not isinstance(other, Constant):
            return NotImplemented
        return type(self.value) is type(other.value) and bool(self.value == other.value)

    def __hash__(self):
        return hash((type(self.value).__name__, self.value))


_variable_ids = itertools.count()


@dataclass(frozen=True, eq=False)
class Variable(Expression):
    """
    A leaf told apart from every other Variable by identity alone.

    `name` is only a default display name; rendering takes names from the
    bindings. `shape` defaults to scalar; tensor-valued variables declare
    theirs so shape errors surface when expressions are composed.
    """
    name: Optional[str] = None
    shape: Shape = SCALAR
    uid: int = field(default_factory=lambda: next(_variable_ids), repr=False)

    def __post_init__(self):
        object.__setattr__(self, "shape", as_shape(self.shape))


@dataclass(frozen=True, eq=False)
class Operation(Expression):
    tag: str
    operands: Tuple[Expression, ...]
    shape: Shape = SCALAR
    _hash: int = field(default=0, init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "_hash", hash((self.tag, self.operands)))

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Operation):
            return NotImplemented
        # cached hashes make structurally different trees cheap to tell apart
        return self._hash == other._hash and self.tag == other.tag and self.operands == other.operands

    def __hash__(self):
        return self._hash

    @property
    def operator(self):
        return lookup(self.tag)


ZERO = Constant(0)
ONE = Constant(1)


def as_expr(value: Any) -> Expression:
    """Ensure `value` is an Expression; numbers and tensor-like values become Constants."""
    return value if isinstance(value, Expression) else Constant(value)


def make_operation(tag: str, *operands: Expression) -> Expression:
    """
    Allocate an Operation node after the caller's identity rules declined.

    Result shape is inferred here, so incompatible operands fail at
    construction. Scalar-constant operands are folded when enabled.
    """
    op = lookup(tag)
    shape = op.infer_shape(*(o.shape for o in operands))
    if get_config().fold_constants and all(
        isinstance(o, Constant) and not isinstance(o.value, Tensor) for o in operands
    ):
        folded = Constant(op.evaluate(*(o.value for o in operands)))
        logger.debug("folded %s%r -> %r", tag, tuple(o.value for o in operands), folded.value)
        return folded
    return Operation(tag, tuple(operands), shape)


# ----------------------------- predicates ----------------------------- #
def is_zero(e: Expression) -> bool:
    return isinstance(e, Constant) and not isinstance(e.value, Tensor) and e.value == 0


def is_unit(e: Expression) -> bool:
    return isinstance(e, Constant) and not isinstance(e.value, Tensor) and e.value == 1


def is_operation(e: Expression, tag: str) -> bool:
    return isinstance(e, Operation) and e.tag == tag


# ----------------------------- traversal ----------------------------- #
def node_count(e: Expression) -> int:
    """Number of nodes in the tree (shared sub-trees counted per reference)."""
    if isinstance(e, Operation):
        return 1 + sum(node_count(o) for o in e.operands)
    return 1


def variables_of(e: Expression) -> List[Variable]:
    """Distinct variables in first-occurrence order."""
    seen: Dict[Variable, None] = {}
    visited = set()

    def visit(n):
        if isinstance(n, Variable):
            seen.setdefault(n, None)
        elif isinstance(n, Operation) and n not in visited:
            visited.add(n)
            for o in n.operands:
                visit(o)

    visit(e)
    return list(seen)


def static_shape(e: Any) -> Shape:
    return as_expr(e).shape


def default_names(e: Expression) -> Dict[Variable, str]:
    """Bindings from each variable to its own name, or a generated one."""
    return {v: v.name if v.name is not None else f"v{v.uid}" for v in variables_of(e)}


def distinct_node_count(e: Expression) -> int:
    """Number of distinct nodes; shared sub-trees counted once."""
    seen = set()
    stack = [e]
    while stack:
        n = stack.pop()
        if n in seen:
            continue
        seen.add(n)
        if isinstance(n, Operation):
            stack.extend(n.operands)
    return len(seen)
