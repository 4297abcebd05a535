# xpress/linalg/access.py
"""
Uniform multi-index access to anything with a derivable shape.

Generic algorithms never touch a concrete representation; they ask
`access_for(value)` for an adapter and use its `shape`, `get` and `set`.
Built-in adapters cover:

    Tensor          : flat buffer read/write through Shape.flatten
    list / tuple    : homogeneous rectangular nesting, resolved recursively
    numpy.ndarray   : direct tuple indexing

New value types become tensor-eligible via `register_access`.
"""
from __future__ import annotations
import numbers
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

import numpy as np

from .shape import Shape, _as_multi_index
from ..errors import OperandCategoryError


def is_scalar(value: Any) -> bool:
    """Plain numbers (Python or NumPy scalars) are scalars; 0-d arrays too."""
    if isinstance(value, numbers.Number):
        return True
    return isinstance(value, np.ndarray) and value.ndim == 0


class Access(ABC):
    """Strategy for reading/writing elements of one family of value types."""

    @abstractmethod
    def shape(self, value) -> Optional[Shape]:
        """Shape of `value`, or None when it cannot be derived (ineligible)."""

    @abstractmethod
    def get(self, value, index: Sequence[int]):
        ...

    def set(self, value, index: Sequence[int], element) -> None:
        raise TypeError(f"{type(value).__name__} values are read-only")


class NestedSequenceAccess(Access):

    def shape(self, value) -> Optional[Shape]:
        extents = _nested_extents(value)
        return Shape(extents) if extents else None

    def get(self, value, index):
        for i in index:
            value = value[i]
        return value

    def set(self, value, index, element):
        *head, last = index
        for i in head:
            value = value[i]
        if not isinstance(value, list):
            raise TypeError(f"{type(value).__name__} values are read-only")
        value[last] = element


def _nested_extents(value):
    if not isinstance(value, (list, tuple)) or len(value) == 0:
        return None
    if all(is_scalar(v) for v in value):
        return (len(value),)
    inner = [_nested_extents(v) for v in value]
    if inner[0] is None or any(e != inner[0] for e in inner):
        return None  # ragged or mixed nesting
    return (len(value),) + inner[0]


class NdarrayAccess(Access):

    def shape(self, value) -> Optional[Shape]:
        if value.ndim == 0 or 0 in value.shape:
            return None
        return Shape(value.shape)

    def get(self, value, index):
        return value[tuple(index)]

    def set(self, value, index, element):
        value[tuple(index)] = element


# Adapters keyed by type; lookup walks the MRO so subclasses inherit them
_ADAPTERS: Dict[type, Access] = {
    list: NestedSequenceAccess(),
    tuple: NestedSequenceAccess(),
    np.ndarray: NdarrayAccess(),
}


def register_access(value_type: type, adapter: Access) -> None:
    _ADAPTERS[value_type] = adapter


def access_for(value) -> Optional[Access]:
    for klass in type(value).__mro__:
        adapter = _ADAPTERS.get(klass)
        if adapter is not None:
            return adapter
    return None


def is_tensorial(value) -> bool:
    """Eligibility check: does `value` expose a derivable shape?"""
    adapter = access_for(value)
    return adapter is not None and adapter.shape(value) is not None


def shape_of(value) -> Shape:
    adapter = access_for(value)
    shape = adapter.shape(value) if adapter is not None else None
    if shape is None:
        raise OperandCategoryError(f"{type(value).__name__} value has no derivable shape")
    return shape


def get_at(value, index):
    """Element of `value` at `index` (an int is accepted for rank-1 values)."""
    adapter = access_for(value)
    shape = adapter.shape(value) if adapter is not None else None
    if shape is None:
        raise OperandCategoryError(f"{type(value).__name__} value has no derivable shape")
    index = _as_multi_index(index)
    shape.flatten(index)  # rank and bounds check
    return adapter.get(value, index)


def set_at(value, index, element) -> None:
    adapter = access_for(value)
    shape = adapter.shape(value) if adapter is not None else None
    if shape is None:
        raise OperandCategoryError(f"{type(value).__name__} value has no derivable shape")
    index = _as_multi_index(index)
    shape.flatten(index)
    adapter.set(value, index, element)
