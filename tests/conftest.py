"""Pytest configuration and shared fixtures."""
import pytest

from xpress import Variable


@pytest.fixture
def x():
    return Variable("x")


@pytest.fixture
def y():
    return Variable("y")


@pytest.fixture
def z():
    return Variable("z")


@pytest.fixture
def names(x, y, z):
    """Display names for the scalar variable fixtures."""
    return {x: "x", y: "y", z: "z"}
