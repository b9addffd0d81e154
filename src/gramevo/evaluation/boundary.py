"""Per-individual evaluation boundary.

Maps a genome, scores the phenotype and records both on the individual.
Genomes that cannot be mapped (depth or wrap guard, failing action) get the
configured worst-case fitness so one invalid individual never aborts a run.
Grammar defects such as undefined rules always propagate.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from gramevo.config import EvaluationConfig
from gramevo.errors import ActionError, DerivationDepthExceeded, EvaluationError
from gramevo.grammar.grammar import Grammar
from gramevo.mapping.engine import DerivationEngine
from gramevo.protocols import FitnessFunction, GenomeProvider, PhenotypeSink

logger = logging.getLogger(__name__)


class PhenotypeEvaluator:
    """Scores individuals through grammar mapping and a fitness function.

    Args:
        grammar: Grammar used to map genomes.
        fitness_fn: Callable scoring an assembled phenotype.
        actions: Action table for the grammar.
        config: Failure policy, worst-case fitness and derivation limits.
    """

    def __init__(
        self,
        grammar: Grammar,
        fitness_fn: FitnessFunction | Callable[[Any], float],
        actions: Mapping[str, Callable[[Any], Any]] | None = None,
        config: EvaluationConfig | None = None,
    ) -> None:
        self.config = config or EvaluationConfig()
        self.engine = DerivationEngine(grammar, actions, self.config.derivation)
        self.fitness_fn = fitness_fn

    @property
    def worst_fitness(self) -> float:
        return self.config.sentinel

    def score(self, genome: Sequence[int] | GenomeProvider) -> tuple[Any, float]:
        """Map and score ``genome`` without recording anything.

        Returns:
            ``(phenotype, fitness)``; ``phenotype`` is ``None`` when the
            worst-case fitness was assigned.

        Raises:
            DerivationDepthExceeded, ActionError: Only when ``on_fail`` is
                ``"propagate"``.
            UndefinedRuleError: Always propagated.
            EvaluationError: If the fitness function raises.
        """
        try:
            result = self.engine.map_genome(genome)
        except (DerivationDepthExceeded, ActionError) as exc:
            if self.config.derivation.on_fail == "propagate":
                raise
            logger.debug("Assigning worst fitness to unmappable genome: %s", exc)
            return None, self.worst_fitness

        try:
            fitness = float(self.fitness_fn(result.phenotype))
        except Exception as exc:
            raise EvaluationError(f"Fitness function failed: {exc}") from exc
        if math.isnan(fitness):
            logger.debug("Fitness function returned NaN; assigning worst fitness")
            fitness = self.worst_fitness
        return result.phenotype, fitness

    def score_many(self, genomes: Iterable[Sequence[int] | GenomeProvider]) -> list[tuple[Any, float]]:
        return [self.score(genome) for genome in genomes]

    def evaluate_individual(self, individual: GenomeProvider) -> float:
        """Score ``individual`` and record the result when it is a sink."""
        phenotype, fitness = self.score(individual)
        if isinstance(individual, PhenotypeSink):
            individual.record(phenotype, fitness)
        return fitness

    def evaluate(self, individuals: Iterable[GenomeProvider]) -> list[float]:
        return [self.evaluate_individual(individual) for individual in individuals]
