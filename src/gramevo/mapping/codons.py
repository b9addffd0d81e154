"""Codon reader: a wrapping cursor over a genome."""

from __future__ import annotations

from collections.abc import Sequence

from gramevo.errors import GenomeExhaustedError


class CodonReader:
    """Yields genome codons in order, wrapping to the start when exhausted.

    One reader is created per derivation and discarded afterwards; the genome
    itself is never modified.  A wrap is counted when a read starts over at
    the first codon, so reading exactly ``len(genome)`` codons leaves
    ``wraps == 0``.
    """

    __slots__ = ("_genome", "_length", "_index", "_wraps", "_consumed")

    def __init__(self, genome: Sequence[int]) -> None:
        self._genome = tuple(genome)
        self._length = len(self._genome)
        self._index = 0
        self._wraps = 0
        self._consumed = 0

    def next(self) -> int:
        """Return the codon under the cursor and advance.

        Raises:
            GenomeExhaustedError: If the genome is empty.
        """
        if self._length == 0:
            raise GenomeExhaustedError("Cannot read a codon from an empty genome")
        if self._index == self._length:
            self._index = 0
            self._wraps += 1
        codon = self._genome[self._index]
        self._index += 1
        self._consumed += 1
        return codon

    @property
    def wraps(self) -> int:
        return self._wraps

    @property
    def position(self) -> int:
        """Index of the codon the next read returns."""
        return 0 if self._index == self._length else self._index

    @property
    def consumed(self) -> int:
        """Total number of codons read, counting re-reads after wrapping."""
        return self._consumed

    def __repr__(self) -> str:
        return (
            f"CodonReader(position={self.position}, wraps={self._wraps}, "
            f"length={self._length})"
        )
