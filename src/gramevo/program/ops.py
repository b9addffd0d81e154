"""Protected numeric operators (+, -, *, /, abs, neg, etc.).

Operators work element-wise on numpy arrays and on scalars.  Invalid
results (division by zero, log of non-positive values) become NaN instead
of raising, so an evolved program never aborts a fitness evaluation.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

import numpy as np


def safe_add(a: Any, b: Any) -> Any:
    """Element-wise addition."""
    return np.add(a, b)


def safe_sub(a: Any, b: Any) -> Any:
    """Element-wise subtraction."""
    return np.subtract(a, b)


def safe_mul(a: Any, b: Any) -> Any:
    """Element-wise multiplication."""
    return np.multiply(a, b)


def safe_div(a: Any, b: Any) -> Any:
    """Element-wise division; division by zero produces NaN."""
    with np.errstate(divide="ignore", invalid="ignore"):
        result = np.divide(a, b)
    return np.where(np.isfinite(result), result, np.nan)


def safe_neg(a: Any) -> Any:
    return np.negative(a)


def safe_abs(a: Any) -> Any:
    return np.abs(a)


def safe_log(a: Any) -> Any:
    """Natural log; non-positive values produce NaN."""
    with np.errstate(divide="ignore", invalid="ignore"):
        result = np.log(a)
    return np.where(np.isfinite(result), result, np.nan)


def safe_sqrt(a: Any) -> Any:
    """Square root; negative values produce NaN."""
    with np.errstate(invalid="ignore"):
        return np.sqrt(a)


def safe_min_of(a: Any, b: Any) -> Any:
    return np.minimum(a, b)


def safe_max_of(a: Any, b: Any) -> Any:
    return np.maximum(a, b)


@dataclass(frozen=True)
class Operator:
    """Callable with a fixed arity."""

    func: Callable[..., Any]
    arity: int


DEFAULT_OPERATORS: Mapping[str, Operator] = MappingProxyType(
    {
        "+": Operator(safe_add, 2),
        "-": Operator(safe_sub, 2),
        "*": Operator(safe_mul, 2),
        "/": Operator(safe_div, 2),
        "neg": Operator(safe_neg, 1),
        "abs": Operator(safe_abs, 1),
        "log": Operator(safe_log, 1),
        "sqrt": Operator(safe_sqrt, 1),
        "min": Operator(safe_min_of, 2),
        "max": Operator(safe_max_of, 2),
    }
)
