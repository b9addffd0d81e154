"""Tests for configuration models."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from gramevo.config import (
    DerivationConfig,
    EvaluationConfig,
    GenomeConfig,
    ParallelConfig,
)
from gramevo.errors import ConfigurationError


class TestDerivationConfig:
    def test_defaults(self) -> None:
        config = DerivationConfig()
        assert config.start == "start"
        assert config.max_depth == 100
        assert config.max_wraps == 2
        assert config.on_fail == "assign_worst_fitness"

    def test_frozen(self) -> None:
        config = DerivationConfig()
        with pytest.raises(ValidationError):
            config.max_depth = 5  # type: ignore[misc]

    @pytest.mark.parametrize("max_depth", [0, -1])
    def test_max_depth_rejected(self, max_depth: int) -> None:
        with pytest.raises(ConfigurationError, match="max_depth"):
            DerivationConfig(max_depth=max_depth)

    def test_negative_max_wraps_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="max_wraps"):
            DerivationConfig(max_wraps=-1)

    def test_zero_max_wraps_accepted(self) -> None:
        assert DerivationConfig(max_wraps=0).max_wraps == 0

    def test_empty_start_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="start"):
            DerivationConfig(start="")

    def test_unknown_on_fail_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DerivationConfig(on_fail="ignore")  # type: ignore[arg-type]


class TestEvaluationConfig:
    def test_sentinel_when_minimizing(self) -> None:
        assert EvaluationConfig().sentinel == math.inf

    def test_sentinel_when_maximizing(self) -> None:
        assert EvaluationConfig(minimize=False).sentinel == -math.inf

    def test_explicit_worst_fitness(self) -> None:
        assert EvaluationConfig(worst_fitness=1e6).sentinel == 1e6

    def test_nan_worst_fitness_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="worst_fitness"):
            EvaluationConfig(worst_fitness=math.nan)

    def test_nested_derivation(self) -> None:
        config = EvaluationConfig(derivation=DerivationConfig(on_fail="propagate"))
        assert config.derivation.on_fail == "propagate"


class TestGenomeConfig:
    def test_defaults(self) -> None:
        config = GenomeConfig()
        assert config.length == 100
        assert config.codon_max == 256

    def test_zero_length_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="length"):
            GenomeConfig(length=0)

    def test_zero_codon_max_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="codon_max"):
            GenomeConfig(codon_max=0)


class TestParallelConfig:
    def test_defaults(self) -> None:
        config = ParallelConfig()
        assert config.backend == "sequential"
        assert config.max_workers == 1

    def test_max_workers_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="max_workers"):
            ParallelConfig(max_workers=0)

    def test_max_in_flight_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="max_in_flight"):
            ParallelConfig(max_in_flight=0)
