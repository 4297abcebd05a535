import numpy as np
import pytest

from xpress import OperandCategoryError, ShapeMismatchError, lookup
from xpress.linalg import Shape, Tensor, tensor


def test_uniform_fill():
    t = Tensor([2, 3], 1.5)
    assert t.shape == Shape((2, 3))
    assert all(v == 1.5 for v in t)
    assert t[(1, 2)] == 1.5


def test_element_list():
    t = tensor([2, 3], [1, 2, 3, 4, 5, 6])
    assert t[(1, 0)] == 4
    assert t.to_nested() == [[1, 2, 3], [4, 5, 6]]


def test_element_list_must_match_count():
    with pytest.raises(ShapeMismatchError):
        Tensor([2, 3], [1, 2, 3, 4, 5])


def test_rank_one_scalar_index():
    t = Tensor([3], [7, 8, 9])
    assert t[1] == 8
    assert t[(2,)] == 9
    with pytest.raises(IndexError):
        t[3]
    with pytest.raises(IndexError):
        t[(0, 0)]
    with pytest.raises(IndexError):
        t[1.7]
    assert t[np.int64(1)] == 8


def test_equality():
    assert Tensor([2], [1, 2]) == Tensor([2], [1, 2])
    assert Tensor([2], [1, 2]) != Tensor([2], [2, 1])
    # different shapes compare unequal, never raise
    assert Tensor([4], 0) != Tensor([2, 2], 0)
    assert hash(Tensor([2], [1, 2])) == hash(Tensor([2], [1, 2]))


def test_scalar_multiplication():
    assert Tensor([2], 3) * 4 == Tensor([2], 12)
    assert 4 * Tensor([2], 3) == Tensor([2], 12)


def test_tensor_product_contracts_to_scalar():
    assert Tensor([3], [1, 2, 3]) * Tensor([3], [4, 5, 6]) == 32


@pytest.mark.parametrize("extents", [(3,), (2, 3), (2, 1, 2)])
def test_add_then_sub_round_trips(extents):
    t1 = Tensor.build(extents, lambda idx: sum(idx) + 1)
    t2 = Tensor.build(extents, lambda idx: 10 * idx[0] - 3)
    assert (t1 + t2) - t2 == t1


def test_addition_requires_equal_shapes():
    with pytest.raises(ShapeMismatchError):
        Tensor([2], 1) + Tensor([3], 1)
    with pytest.raises(OperandCategoryError):
        Tensor([2], 1) + 1


def test_nested_lists_participate():
    assert Tensor([2, 2], [1, 2, 3, 4]) + [[1, 1], [1, 1]] == Tensor([2, 2], [2, 3, 4, 5])


def test_power_is_elementwise():
    assert Tensor([3], [1, 2, 3]) ** 2 == Tensor([3], [1, 4, 9])
    with pytest.raises(OperandCategoryError):
        Tensor([2], 1) ** Tensor([2], 1)
    with pytest.raises(OperandCategoryError):
        lookup("pow").evaluate(2, Tensor([2], 1))


def test_operations_never_mutate_operands():
    t = Tensor([2], [1, 2])
    t * 3
    -t
    assert t == Tensor([2], [1, 2])
    with pytest.raises(ValueError):
        t._values[0] = 5


def test_from_values_and_to_numpy():
    a = np.arange(6).reshape(2, 3)
    t = Tensor.from_values(a)
    assert t.shape == Shape((2, 3))
    assert np.array_equal(t.to_numpy(), a)
    assert Tensor([2, 3], a) == t


def test_rank_zero_is_not_a_tensor():
    with pytest.raises(ValueError):
        Tensor([], 1)
