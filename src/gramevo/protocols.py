"""Protocols (extension points) for gramevo.

Protocols define structural interfaces that consumers implement.
They use ``typing.Protocol`` (not ABCs) so population and individual
implementations never need to inherit from gramevo classes.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gramevo.program.expr import Expression


@runtime_checkable
class GenomeProvider(Protocol):
    """Anything that exposes an ordered integer genome.

    Example::

        class MyIndividual:
            def codons(self):
                return self.chromosome
    """

    def codons(self) -> Sequence[int]: ...


@runtime_checkable
class PhenotypeSink(Protocol):
    """Accepts the assembled phenotype and its fitness.

    ``phenotype`` is ``None`` when the genome could not be mapped and the
    worst-case fitness was assigned instead.
    """

    def record(self, phenotype: Any, fitness: float) -> None: ...


@runtime_checkable
class FitnessFunction(Protocol):
    """Scores an assembled phenotype."""

    def __call__(self, phenotype: Any) -> float: ...


@runtime_checkable
class Compiler(Protocol):
    """Turns an inert expression tree into a callable over named inputs."""

    def compile(
        self,
        expr: Expression,
        arg_names: Sequence[str],
    ) -> Callable[..., Any]: ...
