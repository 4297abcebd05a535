# xpress/core/stream.py
"""
Render expressions as text.

Leaves are written here; every Operation is handed to its operator's
print rule, which writes the symbol and decides on its own whether an
operand needs parentheses. There is no global precedence table.
"""
from __future__ import annotations
import io
import numbers
from typing import Any, Mapping, TextIO

from .node import Expression, Constant, Variable, Operation, as_expr
from ..config import get_config
from ..errors import UnboundVariableError
from ..linalg.tensor import Tensor


def format_value(value: Any) -> str:
    """Literal form of a scalar or Tensor constant."""
    if isinstance(value, Tensor):
        return _format_nested(value.to_nested())
    if isinstance(value, (bool, numbers.Integral)):
        return str(value)
    if isinstance(value, numbers.Real):
        return format(float(value), get_config().float_format)
    return str(value)


def _format_nested(rows) -> str:
    if isinstance(rows, list):
        return "[" + ", ".join(_format_nested(r) for r in rows) + "]"
    return format_value(rows)


def render(expr: Any, bindings: Mapping[Variable, str]) -> str:
    """
    Text of `expr`, with variables shown by their names in `bindings`.

    Raises UnboundVariableError if a variable has no name; nothing is
    returned in that case.
    """
    out = io.StringIO()
    _write(out, as_expr(expr), bindings)
    return out.getvalue()


def write_to(stream: TextIO, expr: Any, bindings: Mapping[Variable, str]) -> int:
    """Render fully, then write to `stream`. Returns the number of characters written."""
    text = render(expr, bindings)
    stream.write(text)
    return len(text)


def _write(out: TextIO, e: Expression, bindings: Mapping[Variable, str]) -> None:
    if isinstance(e, Constant):
        out.write(format_value(e.value))
    elif isinstance(e, Variable):
        if e not in bindings:
            raise UnboundVariableError(e)
        out.write(str(bindings[e]))
    elif isinstance(e, Operation):
        e.operator.stream(out, e.operands, lambda sub: _write(out, sub, bindings))
    else:
        raise TypeError(f"not an expression node: {type(e).__name__}")
