"""Tests for protected numeric operators."""

from __future__ import annotations

import numpy as np
import pytest

from gramevo.program.ops import (
    DEFAULT_OPERATORS,
    safe_abs,
    safe_add,
    safe_div,
    safe_log,
    safe_max_of,
    safe_min_of,
    safe_mul,
    safe_neg,
    safe_sqrt,
    safe_sub,
)


class TestOperatorTable:
    def test_contains_arithmetic(self) -> None:
        assert {"+", "-", "*", "/"} <= set(DEFAULT_OPERATORS)

    @pytest.mark.parametrize(
        ("name", "arity"),
        [("+", 2), ("/", 2), ("neg", 1), ("sqrt", 1), ("max", 2)],
    )
    def test_arity(self, name: str, arity: int) -> None:
        assert DEFAULT_OPERATORS[name].arity == arity

    def test_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_OPERATORS["pow"] = DEFAULT_OPERATORS["+"]  # type: ignore[index]


class TestArithmetic:
    def test_add_sub_mul(self) -> None:
        a = np.array([1.0, 2.0, 3.0])
        b = np.array([4.0, 5.0, 6.0])
        np.testing.assert_array_equal(safe_add(a, b), [5.0, 7.0, 9.0])
        np.testing.assert_array_equal(safe_sub(a, b), [-3.0, -3.0, -3.0])
        np.testing.assert_array_equal(safe_mul(a, b), [4.0, 10.0, 18.0])

    def test_scalars(self) -> None:
        assert safe_add(2, 3) == 5


class TestDiv:
    def test_basic(self) -> None:
        np.testing.assert_array_equal(
            safe_div(np.array([6.0, 9.0]), np.array([2.0, 3.0])), [3.0, 3.0]
        )

    def test_division_by_zero_is_nan(self) -> None:
        result = safe_div(np.array([1.0, 0.0, 4.0]), np.array([0.0, 0.0, 2.0]))
        assert np.isnan(result[0])
        assert np.isnan(result[1])
        assert result[2] == 2.0


class TestUnary:
    def test_neg_abs(self) -> None:
        a = np.array([-1.0, 2.0])
        np.testing.assert_array_equal(safe_neg(a), [1.0, -2.0])
        np.testing.assert_array_equal(safe_abs(a), [1.0, 2.0])

    def test_log_non_positive_is_nan(self) -> None:
        result = safe_log(np.array([np.e, 0.0, -1.0]))
        assert result[0] == pytest.approx(1.0)
        assert np.isnan(result[1])
        assert np.isnan(result[2])

    def test_sqrt_negative_is_nan(self) -> None:
        result = safe_sqrt(np.array([4.0, -4.0]))
        assert result[0] == 2.0
        assert np.isnan(result[1])


class TestMinMax:
    def test_elementwise(self) -> None:
        a = np.array([1.0, 5.0])
        b = np.array([3.0, 2.0])
        np.testing.assert_array_equal(safe_min_of(a, b), [1.0, 2.0])
        np.testing.assert_array_equal(safe_max_of(a, b), [3.0, 5.0])
