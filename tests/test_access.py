import numpy as np
import pytest

from xpress import OperandCategoryError
from xpress.linalg import (
    Access, Shape, Tensor, register_access, is_tensorial, shape_of, get_at, set_at, contract,
)


def test_nested_lists_expose_shape_and_elements():
    v = [[1, 2, 3], [4, 5, 6]]
    assert shape_of(v) == Shape((2, 3))
    assert get_at(v, (1, 2)) == 6
    assert get_at(((1, 2), (3, 4)), (1, 0)) == 3


def test_ragged_or_non_numeric_values_are_ineligible():
    assert not is_tensorial([[1, 2], [3]])
    assert not is_tensorial([])
    assert not is_tensorial("abc")
    assert not is_tensorial(3.0)
    with pytest.raises(OperandCategoryError):
        shape_of(object())


def test_set_at_writes_through_lists_only():
    v = [[0, 0], [0, 0]]
    set_at(v, (1, 0), 7)
    assert v == [[0, 0], [7, 0]]
    with pytest.raises(TypeError):
        set_at(((1, 2), (3, 4)), (0, 0), 9)


def test_ndarray_access():
    a = np.arange(6).reshape(2, 3)
    assert shape_of(a) == Shape((2, 3))
    assert get_at(a, (1, 1)) == 4
    assert not is_tensorial(np.float64(1.0))


def test_bounds_and_rank_are_checked():
    with pytest.raises(IndexError):
        get_at([[1, 2], [3, 4]], (2, 0))
    with pytest.raises(IndexError):
        get_at([1, 2, 3], (0, 0))


def test_rank_one_accepts_plain_int():
    assert get_at([1, 2, 3], 2) == 3


def test_fractional_index_is_rejected():
    with pytest.raises(IndexError):
        get_at([[1, 2], [3, 4]], (0.5, 1))
    with pytest.raises(IndexError):
        set_at([[1, 2], [3, 4]], (1, 1.0), 9)


def test_registered_type_joins_tensor_operations():
    class Grid:
        def __init__(self, rows, cols):
            self.rows, self.cols = rows, cols
            self.cells = {}

    class GridAccess(Access):
        def shape(self, value):
            return Shape((value.rows, value.cols))

        def get(self, value, index):
            return value.cells.get(tuple(index), 0)

    register_access(Grid, GridAccess())
    g = Grid(2, 2)
    g.cells[(1, 1)] = 5

    assert is_tensorial(g)
    assert get_at(g, (1, 1)) == 5
    assert Tensor.from_values(g) == Tensor([2, 2], [0, 0, 0, 5])
    assert contract(g, [[1, 1], [1, 1]]) == 5
