"""Expression programs produced by grammars and their compilation."""

from gramevo.program.compile import TreeCompiler, compile_expression
from gramevo.program.expr import (
    Call,
    Expression,
    Literal,
    Variable,
    as_expression,
    binary_call,
    prefix_call,
    to_source,
    variables,
)
from gramevo.program.ops import DEFAULT_OPERATORS, Operator

__all__ = [
    "Call",
    "DEFAULT_OPERATORS",
    "Expression",
    "Literal",
    "Operator",
    "TreeCompiler",
    "Variable",
    "as_expression",
    "binary_call",
    "compile_expression",
    "prefix_call",
    "to_source",
    "variables",
]
