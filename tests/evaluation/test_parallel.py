"""Tests for ParallelEvaluator.

Ray tests use a mocked ray module -- no real ray import is required.
"""

from __future__ import annotations

import math
import sys
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from gramevo.config import ParallelConfig
from gramevo.errors import ConfigurationError, ParallelExecutionError
from gramevo.evaluation import Genome, Individual, ParallelEvaluator, PhenotypeEvaluator
from gramevo.grammar import Grammar


def _fitness(phenotype: Any) -> float:
    return float(phenotype) if not isinstance(phenotype, list) else 0.0


@pytest.fixture
def evaluator(sum_grammar: Grammar) -> PhenotypeEvaluator:
    return PhenotypeEvaluator(sum_grammar, _fitness)


@pytest.fixture
def population() -> list[Individual]:
    return [Individual(Genome((0, d))) for d in range(6)] + [Individual(Genome((1,)))]


class _FakeObjectRef:
    """Hashable stand-in for a ray ObjectRef."""

    _counter = 0

    def __init__(self, value: Any) -> None:
        _FakeObjectRef._counter += 1
        self._id = _FakeObjectRef._counter
        self.value = value

    def __hash__(self) -> int:
        return self._id

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _FakeObjectRef) and self._id == other._id


def _make_mock_ray() -> tuple[MagicMock, list[list[Any]]]:
    mock_ray = MagicMock()
    mock_ray.is_initialized.return_value = False
    mock_ray.put.side_effect = _FakeObjectRef

    submitted: list[list[Any]] = []
    remote_function = MagicMock()

    def fake_submit(evaluator_ref: _FakeObjectRef, chunk: list[Any]) -> _FakeObjectRef:
        submitted.append(chunk)
        return _FakeObjectRef(evaluator_ref.value.score_many(chunk))

    remote_function.remote.side_effect = fake_submit
    mock_ray.remote.return_value = remote_function
    mock_ray.get.side_effect = lambda ref: ref.value

    def fake_wait(pending: list[Any], num_returns: int = 1) -> tuple[list[Any], list[Any]]:
        return pending[:num_returns], pending[num_returns:]

    mock_ray.wait.side_effect = fake_wait
    return mock_ray, submitted


class TestSequential:
    def test_records_and_returns_in_order(
        self, evaluator: PhenotypeEvaluator, population: list[Individual]
    ) -> None:
        out = ParallelEvaluator(evaluator=evaluator).evaluate_batch(population)
        assert out == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, math.inf]
        assert [ind.phenotype for ind in population] == [0, 1, 2, 3, 4, 5, None]

    def test_call_override(self, evaluator: PhenotypeEvaluator) -> None:
        out = ParallelEvaluator().evaluate_batch([Genome((0, 8))], evaluator=evaluator)
        assert out == [8.0]

    def test_empty_batch(self, evaluator: PhenotypeEvaluator) -> None:
        assert ParallelEvaluator(evaluator=evaluator).evaluate_batch([]) == []

    def test_missing_evaluator(self) -> None:
        with pytest.raises(ConfigurationError, match="requires an evaluator"):
            ParallelEvaluator().evaluate_batch([Genome((0,))])

    def test_backend_failure_wrapped(self, sum_grammar: Grammar) -> None:
        class Exploding(PhenotypeEvaluator):
            def score_many(self, genomes: Any) -> Any:
                raise RuntimeError("worker died")

        wrapper = ParallelEvaluator(evaluator=Exploding(sum_grammar, _fitness))
        with pytest.raises(ParallelExecutionError, match="worker died"):
            wrapper.evaluate_batch([Genome((0,))])


class TestValidation:
    def test_invalid_backend(self) -> None:
        with pytest.raises(ConfigurationError, match="backend must be"):
            ParallelEvaluator(backend="threads")

    def test_invalid_max_workers(self) -> None:
        with pytest.raises(ConfigurationError, match="max_workers"):
            ParallelEvaluator(max_workers=0)

    def test_invalid_max_in_flight(self) -> None:
        with pytest.raises(ConfigurationError, match="max_in_flight"):
            ParallelEvaluator(max_in_flight=0)

    def test_from_config(self, evaluator: PhenotypeEvaluator) -> None:
        config = ParallelConfig(backend="ray", max_workers=3, max_in_flight=2)
        wrapper = ParallelEvaluator.from_config(evaluator, config)
        assert wrapper.backend == "ray"
        assert wrapper.max_workers == 3
        assert wrapper.max_in_flight == 2


class TestRayBackend:
    def test_chunks_dispatched_and_reassembled(
        self, evaluator: PhenotypeEvaluator, population: list[Individual]
    ) -> None:
        mock_ray, submitted = _make_mock_ray()
        wrapper = ParallelEvaluator(
            evaluator=evaluator, backend="ray", max_workers=3, max_in_flight=1
        )
        with patch.dict(sys.modules, {"ray": mock_ray}):
            out = wrapper.evaluate_batch(population)

        assert out == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, math.inf]
        assert [len(chunk) for chunk in submitted] == [3, 3, 1]
        assert population[3].phenotype == 3
        mock_ray.init.assert_called_once()

    def test_genomes_shipped_as_tuples(
        self, evaluator: PhenotypeEvaluator, population: list[Individual]
    ) -> None:
        mock_ray, submitted = _make_mock_ray()
        wrapper = ParallelEvaluator(evaluator=evaluator, backend="ray", max_workers=2)
        with patch.dict(sys.modules, {"ray": mock_ray}):
            wrapper.evaluate_batch(population)
        assert submitted[0][0] == (0, 0)

    def test_falls_back_without_ray(
        self, evaluator: PhenotypeEvaluator, population: list[Individual]
    ) -> None:
        wrapper = ParallelEvaluator(evaluator=evaluator, backend="ray")
        with patch.dict(sys.modules, {"ray": None}):
            out = wrapper.evaluate_batch(population)
        assert out[-1] == math.inf
        assert out[:6] == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]
