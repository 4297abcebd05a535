# xpress/core/registry.py
"""
Operator descriptors and the process-wide registry.

An operator is registered once with everything the engines need:

    rules       : evaluation rule per operand-category tuple, e.g.
                  {(SCALAR, SCALAR): f, (TENSOR, SCALAR): g}
    shape_rule  : static result shape from operand shapes; rejects
                  invalid combinations at construction time
    derivative  : (operands, operand_derivatives) -> Expression
    stream      : (out, operands, write) -> None, writes the operation
                  to a text stream, calling write(sub) for operands

Commutative binary operators only need the tensor-first rule; the
scalar-first pairing is served by swapping the operands.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from ..linalg.access import is_scalar, is_tensorial
from ..linalg.algebra import map_elements
from ..linalg.shape import Shape, SCALAR
from ..errors import OperandCategoryError, ShapeMismatchError, UnknownOperatorError

logger = logging.getLogger(__name__)


class Category(Enum):
    SCALAR = "scalar"
    TENSOR = "tensor"


S, T = Category.SCALAR, Category.TENSOR


def category_of(value: Any) -> Category:
    if is_scalar(value):
        return S
    if is_tensorial(value):
        return T
    raise OperandCategoryError(f"{type(value).__name__} is neither a scalar nor tensor-eligible")


def category_of_shape(shape: Shape) -> Category:
    return S if shape.rank == 0 else T


@dataclass(frozen=True)
class Operator:
    tag: str
    symbol: str
    arity: int
    rules: Mapping[Tuple[Category, ...], Callable[..., Any]]
    shape_rule: Callable[..., Shape]
    derivative: Callable[[Sequence[Any], Sequence[Any]], Any]
    stream: Callable[..., None]
    commutative: bool = False
    notation: str = "infix"          # "infix", "prefix" or "function"

    def rule_for(self, categories: Tuple[Category, ...]) -> Callable[..., Any]:
        rule = self.rules.get(categories)
        if rule is not None:
            return rule
        if self.commutative and self.arity == 2:
            swapped = self.rules.get(categories[::-1])
            if swapped is not None:
                return lambda a, b: swapped(b, a)
        pair = ", ".join(c.value for c in categories)
        raise OperandCategoryError(f"operator '{self.tag}' is undefined for ({pair}) operands")

    def evaluate(self, *values):
        if len(values) != self.arity:
            raise TypeError(f"operator '{self.tag}' takes {self.arity} operand(s), got {len(values)}")
        return self.rule_for(tuple(category_of(v) for v in values))(*values)

    def infer_shape(self, *shapes: Shape) -> Shape:
        self.rule_for(tuple(category_of_shape(s) for s in shapes))
        return self.shape_rule(*shapes)


_REGISTRY: Dict[str, Operator] = {}


def register(op: Operator) -> Operator:
    if op.tag in _REGISTRY:
        raise ValueError(f"operator '{op.tag}' is already registered")
    if op.arity not in (1, 2):
        raise ValueError(f"operator '{op.tag}': only unary and binary operators are supported")
    _REGISTRY[op.tag] = op
    logger.debug("registered operator %r (arity=%d, categories=%s)",
                 op.tag, op.arity, [tuple(c.value for c in k) for k in op.rules])
    return op


def lookup(tag: str) -> Operator:
    try:
        return _REGISTRY[tag]
    except KeyError:
        raise UnknownOperatorError(tag) from None


def registered() -> List[str]:
    return sorted(_REGISTRY)


# ---------------- shared rule builders for catalogue entries ---------------- #
def elementwise_rules(fn: Callable[[Any], Any]) -> Dict[Tuple[Category, ...], Callable]:
    """Scalar rule `fn`, applied per element for tensors."""
    return {(S,): fn, (T,): lambda t: map_elements(fn, t)}


def call_stream(name: str) -> Callable[..., None]:
    """Print rule for function notation: name(operand)."""
    def stream(out, operands, write):
        out.write(name + "(")
        write(operands[0])
        out.write(")")
    return stream


def same_shape(a: Shape) -> Shape:
    return a


def matching_shapes(a: Shape, b: Shape) -> Shape:
    """Scalar/scalar or two tensors of equal shape; result keeps the shape."""
    if a != b:
        raise ShapeMismatchError(f"operand shapes {a} and {b} differ", expected=a, actual=b)
    return a


def broadcast_shape(a: Shape, b: Shape) -> Shape:
    """A scalar paired with a tensor takes the tensor's shape."""
    if a.rank == 0:
        return b
    if b.rank == 0:
        return a
    return matching_shapes(a, b)


def contraction_shape(a: Shape, b: Shape) -> Shape:
    if a.rank and b.rank:
        matching_shapes(a, b)
        return SCALAR
    return broadcast_shape(a, b)
