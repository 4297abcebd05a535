# xpress/errors.py
"""
Exception types raised by the expression engine.

All of them derive from `XpressError` and from the closest built-in
exception, so callers can catch either.
"""


class XpressError(Exception):
    """Base class for every error raised by xpress."""


class ShapeMismatchError(XpressError, ValueError):
    """Two tensor operands (or a shape and an element list) do not agree."""

    def __init__(self, message, expected=None, actual=None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class OperandCategoryError(XpressError, TypeError):
    """An operator has no rule for the given scalar/tensor operand pair."""


class UnboundVariableError(XpressError, KeyError):
    """A variable in the tree has no entry in the supplied bindings."""

    def __init__(self, variable):
        super().__init__(variable)
        self.variable = variable

    def __str__(self):
        return f"no binding for variable {self.variable!r}"


class UnknownOperatorError(XpressError, KeyError):
    """Registry lookup of a tag that was never registered."""

    def __str__(self):
        return f"unknown operator tag {self.args[0]!r}"
