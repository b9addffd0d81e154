"""Tests for inert expression trees and action helpers."""

from __future__ import annotations

import pytest

from gramevo.program.expr import (
    Call,
    Literal,
    Variable,
    as_expression,
    binary_call,
    prefix_call,
    to_source,
    variables,
)


class TestAsExpression:
    def test_raw_value_becomes_literal(self) -> None:
        assert as_expression(3) == Literal(3)

    def test_nodes_pass_through(self) -> None:
        var = Variable("x")
        assert as_expression(var) is var

    def test_single_element_list_unwrapped(self) -> None:
        assert as_expression([[Variable("x")]]) == Variable("x")

    def test_longer_sequence_rejected(self) -> None:
        with pytest.raises(TypeError, match="2-element"):
            as_expression([1, 2])


class TestActionHelpers:
    def test_binary_call(self) -> None:
        assert binary_call([Variable("x"), "+", 1]) == Call(
            "+", (Variable("x"), Literal(1))
        )

    def test_binary_call_requires_three_values(self) -> None:
        with pytest.raises(ValueError):
            binary_call([1, "+"])

    def test_prefix_call(self) -> None:
        assert prefix_call(["neg", 2]) == Call("neg", (Literal(2),))

    def test_prefix_call_many_args(self) -> None:
        assert prefix_call(["max", 1, Variable("y")]).args == (Literal(1), Variable("y"))


class TestInspection:
    def test_variables(self) -> None:
        expr = Call("+", (Variable("x"), Call("*", (Variable("y"), Variable("x")))))
        assert variables(expr) == {"x", "y"}

    def test_variables_of_literal(self) -> None:
        assert variables(Literal(1)) == set()

    def test_to_source_infix(self) -> None:
        expr = Call("+", (Variable("x"), Call("*", (Literal(2), Variable("y")))))
        assert to_source(expr) == "(x + (2 * y))"

    def test_to_source_prefix(self) -> None:
        assert to_source(Call("max", (Variable("a"), Literal(0)))) == "max(a, 0)"
