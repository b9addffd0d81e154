"""Genomes and a minimal individual implementation."""

from __future__ import annotations

import operator
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from numpy.random import Generator, default_rng

from gramevo.config import GenomeConfig
from gramevo.errors import GenomeError


@dataclass(frozen=True)
class Genome:
    """Fixed-length sequence of non-negative integer codons.

    Attributes:
        values: The codons, in order.
    """

    values: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        raw = tuple(self.values)
        if any(isinstance(codon, bool) for codon in raw):
            raise GenomeError("Codons must be integers, not booleans")
        try:
            values = tuple(operator.index(codon) for codon in raw)
        except TypeError as exc:
            raise GenomeError(f"Codons must be integers: {exc}") from exc
        if any(codon < 0 for codon in values):
            raise GenomeError("Codons must be non-negative")
        object.__setattr__(self, "values", values)

    def codons(self) -> tuple[int, ...]:
        return self.values

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)


def random_genome(
    length: int,
    codon_max: int,
    rng: Generator | int | None = None,
) -> Genome:
    """Draw ``length`` codons uniformly from ``[0, codon_max)``.

    Args:
        length: Number of codons.
        codon_max: Exclusive upper bound of codon values.
        rng: A numpy ``Generator`` or a seed for a new one.
    """
    if length < 0:
        raise GenomeError("length must be >= 0")
    if codon_max < 1:
        raise GenomeError("codon_max must be >= 1")
    generator = rng if isinstance(rng, Generator) else default_rng(rng)
    return Genome(tuple(int(codon) for codon in generator.integers(0, codon_max, size=length)))


def random_genomes(count: int, config: GenomeConfig) -> list[Genome]:
    """Draw ``count`` genomes from one generator seeded with ``config.seed``."""
    generator = default_rng(config.seed)
    return [random_genome(config.length, config.codon_max, generator) for _ in range(count)]


@dataclass
class Individual:
    """Genome plus the phenotype and fitness recorded for it.

    Satisfies both :class:`~gramevo.protocols.GenomeProvider` and
    :class:`~gramevo.protocols.PhenotypeSink`.
    """

    genome: Genome
    phenotype: Any = None
    fitness: float | None = None

    def codons(self) -> tuple[int, ...]:
        return self.genome.codons()

    def record(self, phenotype: Any, fitness: float) -> None:
        self.phenotype = phenotype
        self.fitness = fitness

    @property
    def evaluated(self) -> bool:
        return self.fitness is not None
