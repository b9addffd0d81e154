"""Configuration models for gramevo (Pydantic v2).

Provides frozen Pydantic models that validate all parameters at construction
time (fail-fast).  Invalid values raise
:class:`~gramevo.errors.ConfigurationError`.
"""

from __future__ import annotations

import math
from typing import Literal, Self

from pydantic import BaseModel, Field, model_validator

from gramevo.errors import ConfigurationError

OnFail = Literal["assign_worst_fitness", "propagate"]


class DerivationConfig(BaseModel, frozen=True):
    """Limits and failure policy for genome to phenotype mapping.

    Attributes:
        start: Rule the derivation starts from.
        max_depth: Maximum recursion depth before the derivation is abandoned.
        max_wraps: Maximum number of times the codon reader may wrap around
            the genome before another codon read is refused.
        on_fail: What the evaluation boundary does with a genome that cannot
            be mapped.
    """

    start: str = "start"
    max_depth: int = 100
    max_wraps: int = 2
    on_fail: OnFail = "assign_worst_fitness"

    @model_validator(mode="after")
    def _validate_derivation(self) -> Self:
        if not self.start:
            raise ConfigurationError("start must be a non-empty rule name")
        if self.max_depth < 1:
            raise ConfigurationError("max_depth must be >= 1")
        if self.max_wraps < 0:
            raise ConfigurationError("max_wraps must be >= 0")
        return self


class EvaluationConfig(BaseModel, frozen=True):
    """Configuration for the per-individual evaluation boundary.

    Attributes:
        minimize: Whether lower fitness is better.
        worst_fitness: Sentinel assigned to genomes that cannot be mapped.
            Defaults to ``inf`` when minimizing and ``-inf`` otherwise.
        derivation: Derivation limits and failure policy.
    """

    minimize: bool = True
    worst_fitness: float | None = None
    derivation: DerivationConfig = Field(default_factory=DerivationConfig)

    @model_validator(mode="after")
    def _validate_evaluation(self) -> Self:
        if self.worst_fitness is not None and math.isnan(self.worst_fitness):
            raise ConfigurationError("worst_fitness must not be NaN")
        return self

    @property
    def sentinel(self) -> float:
        """Worst-case fitness value for this objective direction."""
        if self.worst_fitness is not None:
            return self.worst_fitness
        return math.inf if self.minimize else -math.inf


class GenomeConfig(BaseModel, frozen=True):
    """Configuration for random genome initialisation.

    Attributes:
        length: Number of codons per genome.
        codon_max: Exclusive upper bound of codon values.
        seed: Random seed for reproducibility.
    """

    length: int = 100
    codon_max: int = 256
    seed: int = 42

    @model_validator(mode="after")
    def _validate_genome(self) -> Self:
        if self.length < 1:
            raise ConfigurationError("length must be >= 1")
        if self.codon_max < 1:
            raise ConfigurationError("codon_max must be >= 1")
        return self


class ParallelConfig(BaseModel, frozen=True):
    """Configuration for batch evaluation.

    Attributes:
        backend: Parallelisation backend to use.
        max_workers: Maximum number of parallel workers.
        max_in_flight: Maximum concurrent tasks submitted to ray.
    """

    backend: Literal["sequential", "ray"] = "sequential"
    max_workers: int = 1
    max_in_flight: int = 4

    @model_validator(mode="after")
    def _validate_parallel(self) -> Self:
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be >= 1")
        if self.max_in_flight < 1:
            raise ConfigurationError("max_in_flight must be >= 1")
        return self
