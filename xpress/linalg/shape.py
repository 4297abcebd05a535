# xpress/linalg/shape.py
"""
Shapes and multi-indices.

A shape is an ordered tuple of positive extents; rank 0 denotes a scalar.
Multi-indices map to flat offsets in row-major order:

    flat = sum_d idx[d] * prod(extent[d+1:])
"""
from __future__ import annotations
import itertools
import numbers
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

MultiIndex = Tuple[int, ...]


@dataclass(frozen=True)
class Shape:
    extents: Tuple[int, ...] = ()

    def __post_init__(self):
        extents = tuple(int(e) for e in self.extents)
        if any(e <= 0 for e in extents):
            raise ValueError(f"shape extents must be positive, got {extents}")
        object.__setattr__(self, "extents", extents)

    @classmethod
    def of(cls, *extents: int) -> "Shape":
        return cls(tuple(extents))

    @property
    def rank(self) -> int:
        return len(self.extents)

    @property
    def count(self) -> int:
        n = 1
        for e in self.extents:
            n *= e
        return n

    def flatten(self, index) -> int:
        """Row-major flat offset of `index`; IndexError on rank mismatch or out of bounds."""
        index = _as_multi_index(index)
        if len(index) != self.rank:
            raise IndexError(f"index {index} has rank {len(index)}, shape {self} has rank {self.rank}")
        flat = 0
        for i, e in zip(index, self.extents):
            if not 0 <= i < e:
                raise IndexError(f"index {index} out of bounds for shape {self}")
            flat = flat * e + i
        return flat

    def unflatten(self, flat: int) -> MultiIndex:
        if not 0 <= flat < self.count:
            raise IndexError(f"flat index {flat} out of range for shape {self} (count {self.count})")
        index = []
        for e in reversed(self.extents):
            flat, i = divmod(flat, e)
            index.append(i)
        return tuple(reversed(index))

    def indices(self) -> "MultiIndexRange":
        return MultiIndexRange(self)

    def __iter__(self):
        return iter(self.extents)

    def __getitem__(self, d):
        return self.extents[d]

    def __str__(self):
        return "[" + ",".join(str(e) for e in self.extents) + "]"


SCALAR = Shape()


class MultiIndexRange:
    """Every valid multi-index of a shape, row-major, each exactly once. Re-iterable."""
    __slots__ = ("shape",)

    def __init__(self, shape: Shape):
        self.shape = shape

    def __iter__(self) -> Iterator[MultiIndex]:
        return itertools.product(*(range(e) for e in self.shape.extents))

    def __len__(self):
        return self.shape.count

    def __repr__(self):
        return f"MultiIndexRange({self.shape})"


def _as_multi_index(index) -> MultiIndex:
    components = tuple(index) if isinstance(index, (tuple, list, range)) else (index,)
    for i in components:
        if not isinstance(i, numbers.Integral):
            raise IndexError(f"index components must be integers, got {type(i).__name__} in {index!r}")
    return tuple(int(i) for i in components)


def as_shape(value) -> Shape:
    """Accept a Shape, a sequence of extents, or a single extent."""
    if isinstance(value, Shape):
        return value
    if isinstance(value, int):
        return Shape((value,))
    return Shape(tuple(value))


# ----------------------------- functional surface ----------------------------- #
def rank(shape) -> int:
    return as_shape(shape).rank


def count(shape) -> int:
    return as_shape(shape).count


def flatten(shape, multi_index: Sequence[int]) -> int:
    return as_shape(shape).flatten(multi_index)


def unflatten(shape, flat: int) -> MultiIndex:
    return as_shape(shape).unflatten(flat)


def equal(shape_a, shape_b) -> bool:
    """Structural equality; different ranks compare unequal, never raise."""
    return as_shape(shape_a).extents == as_shape(shape_b).extents


def enumerate_indices(shape) -> MultiIndexRange:
    return MultiIndexRange(as_shape(shape))
