"""Inert expression trees built by grammar actions.

Grammars that describe programs rather than text use actions to turn
assembled values into :class:`Call` nodes.  The resulting tree is data only;
:mod:`gramevo.program.compile` turns it into a callable.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

INFIX_OPERATORS = frozenset({"+", "-", "*", "/"})


@dataclass(frozen=True)
class Literal:
    """A constant."""

    value: Any


@dataclass(frozen=True)
class Variable:
    """A named input bound when the compiled program is called."""

    name: str


@dataclass(frozen=True)
class Call:
    """Application of operator ``op`` to ``args``."""

    op: str
    args: tuple[Expression, ...]


Expression: TypeAlias = Literal | Variable | Call


def as_expression(value: Any) -> Expression:
    """Coerce an assembled value to an expression node.

    Expression nodes pass through, single-element sequences are unwrapped
    and any other value becomes a :class:`Literal`.

    Raises:
        TypeError: For sequences with more than one element, which have no
            unambiguous expression form.
    """
    if isinstance(value, (Literal, Variable, Call)):
        return value
    if isinstance(value, (list, tuple)):
        if len(value) == 1:
            return as_expression(value[0])
        raise TypeError(f"Cannot convert a {len(value)}-element sequence to an expression")
    return Literal(value)


def binary_call(values: Sequence[Any]) -> Call:
    """Action for ``lhs op rhs`` sequences: ``[lhs, op, rhs] -> Call(op, (lhs, rhs))``."""
    lhs, op, rhs = values
    return Call(str(op), (as_expression(lhs), as_expression(rhs)))


def prefix_call(values: Sequence[Any]) -> Call:
    """Action for ``op arg...`` sequences: ``[op, *args] -> Call(op, args)``."""
    op, *args = values
    return Call(str(op), tuple(as_expression(arg) for arg in args))


def variables(expr: Expression) -> set[str]:
    """Names of all variables referenced in ``expr``."""
    if isinstance(expr, Variable):
        return {expr.name}
    if isinstance(expr, Call):
        names: set[str] = set()
        for arg in expr.args:
            names |= variables(arg)
        return names
    return set()


def to_source(expr: Expression) -> str:
    """Human-readable form; binary infix operators are fully parenthesised."""
    if isinstance(expr, Literal):
        return str(expr.value)
    if isinstance(expr, Variable):
        return expr.name
    rendered = [to_source(arg) for arg in expr.args]
    if expr.op in INFIX_OPERATORS and len(rendered) == 2:
        return f"({rendered[0]} {expr.op} {rendered[1]})"
    return f"{expr.op}({', '.join(rendered)})"
