"""Batch evaluation of many individuals.

Derivations of distinct individuals share only the immutable grammar, so a
population can be scored in parallel without locking.  The ray backend
ships genome codons to workers and records phenotypes and fitness values on
the driver, so individuals never need to be mutated remotely.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from gramevo.config import ParallelConfig
from gramevo.errors import (
    ConfigurationError,
    GrammaticalEvolutionError,
    ParallelExecutionError,
)
from gramevo.evaluation.boundary import PhenotypeEvaluator
from gramevo.protocols import GenomeProvider, PhenotypeSink

logger = logging.getLogger(__name__)


def _score_chunk(
    evaluator: PhenotypeEvaluator,
    genomes: list[tuple[int, ...]],
) -> list[tuple[Any, float]]:
    """Plain function suitable for ``ray.remote`` dispatch."""
    return evaluator.score_many(genomes)


@dataclass
class ParallelEvaluator:
    """Evaluate batches of individuals with a :class:`PhenotypeEvaluator`.

    Parameters
    ----------
    evaluator:
        Evaluator used for every individual.  If ``None``, evaluation
        methods must pass one explicitly.
    backend:
        ``"sequential"`` (default) or ``"ray"``. Ray is optional and
        evaluation falls back to sequential when it is not installed.
    max_workers:
        Number of chunks the batch is split into for the ray backend.
    max_in_flight:
        Maximum number of pending ray tasks before backpressure is applied.
        When ``None``, defaults to the number of chunks.
    """

    evaluator: PhenotypeEvaluator | None = None
    backend: str = "sequential"
    max_workers: int = 1
    max_in_flight: int | None = None

    def __post_init__(self) -> None:
        if self.backend not in {"sequential", "ray"}:
            raise ConfigurationError("backend must be 'sequential' or 'ray'")
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be >= 1")
        if self.max_in_flight is not None and self.max_in_flight < 1:
            raise ConfigurationError("max_in_flight must be >= 1 when set")

    @classmethod
    def from_config(
        cls,
        evaluator: PhenotypeEvaluator | None,
        config: ParallelConfig,
    ) -> ParallelEvaluator:
        return cls(
            evaluator=evaluator,
            backend=config.backend,
            max_workers=config.max_workers,
            max_in_flight=config.max_in_flight,
        )

    def evaluate_batch(
        self,
        individuals: Sequence[GenomeProvider],
        evaluator: PhenotypeEvaluator | None = None,
    ) -> list[float]:
        """Evaluate ``individuals`` and record results on each sink.

        Returns:
            Fitness values in input order.

        Raises:
            ConfigurationError: If no evaluator is configured.
            ParallelExecutionError: If the backend itself fails.
        """
        evaluator_to_use = evaluator or self.evaluator
        if evaluator_to_use is None:
            raise ConfigurationError("ParallelEvaluator requires an evaluator")

        if not individuals:
            return []

        genomes = [tuple(individual.codons()) for individual in individuals]
        try:
            if self.backend == "ray":
                results = self._score_with_ray(genomes, evaluator_to_use)
            else:
                results = evaluator_to_use.score_many(genomes)
        except GrammaticalEvolutionError:
            raise
        except Exception as exc:
            raise ParallelExecutionError(f"Batch evaluation failed: {exc}") from exc

        fitnesses = []
        for individual, (phenotype, fitness) in zip(individuals, results, strict=True):
            if isinstance(individual, PhenotypeSink):
                individual.record(phenotype, fitness)
            fitnesses.append(fitness)
        return fitnesses

    def _score_with_ray(
        self,
        genomes: list[tuple[int, ...]],
        evaluator: PhenotypeEvaluator,
    ) -> list[tuple[Any, float]]:
        try:
            import ray  # type: ignore[import-untyped]
        except ImportError:
            logger.warning("ray is not installed, falling back to sequential evaluation")
            return evaluator.score_many(genomes)

        if not ray.is_initialized():
            ray.init(
                ignore_reinit_error=True,
                include_dashboard=False,
                log_to_driver=False,
            )

        evaluator_ref = ray.put(evaluator)
        remote_score = ray.remote(_score_chunk)

        chunk_size = max(1, -(-len(genomes) // self.max_workers))
        chunks = [genomes[i : i + chunk_size] for i in range(0, len(genomes), chunk_size)]

        max_in_flight = self.max_in_flight or len(chunks)
        pending: list[Any] = []
        collected: list[tuple[int, list[tuple[Any, float]]]] = []
        ref_to_idx: dict[Any, int] = {}

        for idx, chunk in enumerate(chunks):
            ref = remote_score.remote(evaluator_ref, chunk)
            pending.append(ref)
            ref_to_idx[ref] = idx

            while len(pending) > max_in_flight:
                done, pending = ray.wait(pending, num_returns=1)
                for done_ref in done:
                    collected.append((ref_to_idx[done_ref], ray.get(done_ref)))

        for ref in pending:
            collected.append((ref_to_idx[ref], ray.get(ref)))

        collected.sort(key=lambda pair: pair[0])
        return [item for _, chunk_result in collected for item in chunk_result]
