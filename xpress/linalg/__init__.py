# xpress/linalg/__init__.py

"""
Shape-checked linear algebra over arbitrarily shaped values.

Exports:
    Shape, MultiIndexRange : extents and row-major index enumeration
    rank, count, flatten, unflatten, equal, enumerate_indices
    Access, register_access, access_for, is_tensorial, shape_of, get_at, set_at
    Tensor, tensor         : the built-in dense value type
    map_elements, broadcast, zip_elements, contract : generic kernels
"""

from .shape import (
    Shape, SCALAR, MultiIndexRange, as_shape,
    rank, count, flatten, unflatten, equal, enumerate_indices,
)
from .access import (
    Access, register_access, access_for, is_scalar, is_tensorial,
    shape_of, get_at, set_at,
)
from .tensor import Tensor, tensor
from .algebra import map_elements, broadcast, zip_elements, contract, require_same_shape

__all__ = [
    "Shape", "SCALAR", "MultiIndexRange", "as_shape",
    "rank", "count", "flatten", "unflatten", "equal", "enumerate_indices",
    "Access", "register_access", "access_for", "is_scalar", "is_tensorial",
    "shape_of", "get_at", "set_at",
    "Tensor", "tensor",
    "map_elements", "broadcast", "zip_elements", "contract", "require_same_shape",
]
