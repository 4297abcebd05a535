import pytest

from xpress.linalg import Shape, rank, count, flatten, unflatten, equal, enumerate_indices

SHAPES = [(1,), (4,), (2, 3), (3, 1, 2), (2, 2, 2, 2)]


@pytest.mark.parametrize("extents", SHAPES)
def test_flatten_is_bijection_onto_flat_range(extents):
    shape = Shape(extents)
    flats = [flatten(shape, idx) for idx in enumerate_indices(shape)]
    assert sorted(flats) == list(range(count(shape)))
    # row-major enumeration visits offsets in increasing order
    assert flats == list(range(count(shape)))


@pytest.mark.parametrize("extents", SHAPES)
def test_unflatten_inverts_flatten(extents):
    shape = Shape(extents)
    for idx in shape.indices():
        assert unflatten(shape, flatten(shape, idx)) == idx


def test_rank_and_count():
    assert rank(Shape()) == 0
    assert count(Shape()) == 1
    assert rank([2, 3]) == 2
    assert count([2, 3]) == 6
    assert Shape.of(2, 3, 4).count == 24


def test_row_major_offsets():
    assert flatten([2, 3], (1, 2)) == 5
    assert flatten([2, 3, 4], (1, 0, 3)) == 15
    assert flatten([5], 3) == 3


@pytest.mark.parametrize("index", [(2, 0), (0, 3), (-1, 0), (0,), (0, 0, 0), (0.5, 1), (1.0, 0), ("1", 0)])
def test_flatten_rejects_bad_indices(index):
    with pytest.raises(IndexError):
        flatten([2, 3], index)


def test_unflatten_out_of_range():
    with pytest.raises(IndexError):
        unflatten([2, 3], 6)


def test_equality_is_structural():
    assert equal([2, 3], [2, 3])
    assert not equal([2, 3], [3, 2])
    assert not equal([2], [2, 1])
    assert Shape((2, 3)) == Shape.of(2, 3)


def test_enumeration_is_restartable():
    indices = enumerate_indices([2, 2])
    expected = [(0, 0), (0, 1), (1, 0), (1, 1)]
    assert list(indices) == expected
    assert list(indices) == expected
    assert len(indices) == 4


def test_scalar_shape_has_single_empty_index():
    assert list(enumerate_indices(Shape())) == [()]
    assert flatten(Shape(), ()) == 0


def test_extents_must_be_positive():
    with pytest.raises(ValueError):
        Shape((2, 0))
