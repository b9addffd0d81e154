"""Turn inert expression trees into callables.

The compiled callable interprets the tree on every call.  No source text is
generated or evaluated; all checks that can be made without input values
happen once, at compile time.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from gramevo.errors import CompilationError
from gramevo.program.expr import Call, Expression, Literal, Variable
from gramevo.program.ops import DEFAULT_OPERATORS, Operator


def _check(expr: Expression, names: set[str], operators: Mapping[str, Operator]) -> None:
    if isinstance(expr, Literal):
        return
    if isinstance(expr, Variable):
        if expr.name not in names:
            raise CompilationError(f"Unbound variable: {expr.name!r}")
        return
    if isinstance(expr, Call):
        operator = operators.get(expr.op)
        if operator is None:
            raise CompilationError(f"Unknown operator: {expr.op!r}")
        if len(expr.args) != operator.arity:
            raise CompilationError(
                f"Operator {expr.op!r} takes {operator.arity} arguments, got {len(expr.args)}"
            )
        for arg in expr.args:
            _check(arg, names, operators)
        return
    raise CompilationError(f"Not an expression: {expr!r}")


def _evaluate(expr: Expression, env: Mapping[str, Any], operators: Mapping[str, Operator]) -> Any:
    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, Variable):
        return env[expr.name]
    func = operators[expr.op].func
    return func(*(_evaluate(arg, env, operators) for arg in expr.args))


def compile_expression(
    expr: Expression,
    arg_names: Sequence[str],
    operators: Mapping[str, Operator] | None = None,
) -> Callable[..., Any]:
    """Build a callable ``f(*args)`` that evaluates ``expr``.

    Args:
        expr: Expression tree to compile.
        arg_names: Positional parameter names of the resulting callable.
        operators: Operator table; defaults to
            :data:`~gramevo.program.ops.DEFAULT_OPERATORS`.

    Raises:
        CompilationError: On unknown operators, arity mismatches or
            variables missing from ``arg_names``.
    """
    table = DEFAULT_OPERATORS if operators is None else operators
    names = tuple(arg_names)
    if len(set(names)) != len(names):
        raise CompilationError(f"Duplicate argument names: {names!r}")
    _check(expr, set(names), table)

    def program(*args: Any) -> Any:
        if len(args) != len(names):
            raise TypeError(f"expected {len(names)} arguments, got {len(args)}")
        return _evaluate(expr, dict(zip(names, args)), table)

    program.__name__ = "compiled_expression"
    return program


class TreeCompiler:
    """:class:`~gramevo.protocols.Compiler` backed by :func:`compile_expression`."""

    def __init__(self, operators: Mapping[str, Operator] | None = None) -> None:
        self.operators = DEFAULT_OPERATORS if operators is None else operators

    def compile(self, expr: Expression, arg_names: Sequence[str]) -> Callable[..., Any]:
        return compile_expression(expr, arg_names, self.operators)
