# xpress/linalg/tensor.py
from __future__ import annotations
from typing import Any, Callable, Iterator, Optional

import numpy as np

from .shape import Shape, MultiIndex, as_shape
from .access import Access, register_access, access_for, is_scalar, is_tensorial, get_at
from ..errors import ShapeMismatchError


class Tensor:
    """
    Fixed-shape, fixed-dtype multi-dimensional value.

    Attributes
    ----------
    shape : Shape
        Extents, rank >= 1 (rank 0 is a plain scalar, not a Tensor).
    dtype : np.dtype
        Element type shared by every entry.

    The row-major flat buffer is a read-only 1-d ndarray; every operation
    returns a new Tensor.

        Tensor([2, 3], 0.0)                 # uniform fill
        Tensor([3], [1, 2, 3])              # explicit element list, len == count
        Tensor.from_values([[1, 2], [3, 4]])
    """
    __slots__ = ("_shape", "_values")

    def __init__(self, shape: Any, values: Any = 0, *, dtype=None):
        shape = as_shape(shape)
        if shape.rank == 0:
            raise ValueError("a Tensor needs rank >= 1; use a plain scalar for rank 0")
        if isinstance(values, Tensor):
            values = values._values
        if is_scalar(values):
            buf = np.full(shape.count, values, dtype=dtype)
        else:
            buf = np.asarray(values, dtype=dtype)
            if buf.ndim > 1 and buf.shape == shape.extents:
                buf = buf.reshape(-1)
            if buf.ndim != 1 or buf.size != shape.count:
                raise ShapeMismatchError(
                    f"shape {shape} holds {shape.count} elements, got {buf.size}",
                    expected=shape.count, actual=buf.size,
                )
            buf = buf.copy()
        buf.flags.writeable = False
        self._shape = shape
        self._values = buf

    # ----------------------------- construction ----------------------------- #
    @classmethod
    def build(cls, shape: Any, element_at: Callable[[MultiIndex], Any], *, dtype=None) -> "Tensor":
        """Fill a fresh tensor by visiting `shape.indices()` in row-major order."""
        shape = as_shape(shape)
        return cls(shape, [element_at(idx) for idx in shape.indices()], dtype=dtype)

    @classmethod
    def from_values(cls, value: Any, *, dtype=None) -> "Tensor":
        """Copy any tensor-eligible value (nested lists, ndarray, Tensor)."""
        if isinstance(value, Tensor) and dtype is None:
            return value
        adapter = access_for(value)
        shape = adapter.shape(value) if adapter is not None else None
        if shape is None:
            raise TypeError(f"cannot build a Tensor from {type(value).__name__}")
        return cls.build(shape, lambda idx: adapter.get(value, idx), dtype=dtype)

    # ----------------------------- inspection ----------------------------- #
    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    def __getitem__(self, index):
        return get_at(self, index)

    def __iter__(self) -> Iterator:
        return iter(self._values)

    def to_nested(self) -> list:
        flat = self._values.tolist()
        for e in reversed(self._shape.extents[1:]):
            flat = [flat[i:i + e] for i in range(0, len(flat), e)]
        return flat

    def to_numpy(self) -> np.ndarray:
        return self._values.reshape(self._shape.extents).copy()

    # ----------------------------- comparison ----------------------------- #
    def __eq__(self, other):
        if not isinstance(other, Tensor):
            return NotImplemented
        if self._shape != other._shape:
            return False
        return all(self[idx] == other[idx] for idx in self._shape.indices())

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash((self._shape, tuple(self._values.tolist())))

    def __repr__(self):
        return f"Tensor({self._shape}, {self._values.tolist()!r})"

    # ----------------------------- arithmetic ----------------------------- #
    # Delegates to the operator catalogue so values and expressions share one rule set
    def _apply(self, tag, *operands):
        from ..core.registry import lookup
        if not all(is_scalar(o) or is_tensorial(o) for o in operands):
            return NotImplemented  # e.g. an Expression: let its reflected operator build a node
        return lookup(tag).evaluate(*operands)

    def __add__(self, other):      return self._apply("add", self, other)
    def __radd__(self, other):     return self._apply("add", other, self)
    def __sub__(self, other):      return self._apply("sub", self, other)
    def __rsub__(self, other):     return self._apply("sub", other, self)
    def __mul__(self, other):      return self._apply("mul", self, other)
    def __rmul__(self, other):     return self._apply("mul", other, self)
    def __truediv__(self, other):  return self._apply("div", self, other)
    def __pow__(self, other):      return self._apply("pow", self, other)
    def __neg__(self):             return self._apply("neg", self)


class TensorAccess(Access):

    def shape(self, value: Tensor) -> Optional[Shape]:
        return value._shape

    def get(self, value: Tensor, index):
        return value._values[value._shape.flatten(index)]


register_access(Tensor, TensorAccess())


def tensor(shape: Any, values: Any = 0, *, dtype=None) -> Tensor:
    """Functional alias of the Tensor constructor."""
    return Tensor(shape, values, dtype=dtype)
