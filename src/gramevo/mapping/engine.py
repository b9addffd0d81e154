"""Derivation engine: maps a genome through a grammar to a derivation tree.

Only alternations consume codons.  Terminals, sequences and references are
free, so genome length requirements scale with the number of choice points
actually visited rather than with grammar size.

Two guards keep recursive grammars from running away:

- ``max_depth`` bounds recursion; every step through a sequence, alternation
  or reference increments the depth.
- ``max_wraps`` bounds how many times the codon reader may wrap around the
  genome; a read that starts a wrap beyond the limit fails.

Both raise :class:`~gramevo.errors.DerivationDepthExceeded`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from gramevo.config import DerivationConfig
from gramevo.errors import (
    ActionError,
    DerivationDepthExceeded,
    GrammarError,
    UndefinedActionError,
)
from gramevo.grammar.grammar import Grammar, normalize
from gramevo.grammar.rules import (
    ActionRef,
    Alternation,
    Range,
    Reference,
    RuleNode,
    Terminal,
)
from gramevo.grammar.rules import Sequence as SequenceNode
from gramevo.mapping.assemble import assemble, render
from gramevo.mapping.codons import CodonReader
from gramevo.mapping.tree import Applied, Branch, Choice, DerivationTree, Leaf
from gramevo.protocols import GenomeProvider

logger = logging.getLogger(__name__)

Action = Callable[[Any], Any]


@dataclass(frozen=True)
class MappingResult:
    """Outcome of a successful genome mapping.

    Attributes:
        phenotype: Assembled phenotype.
        tree: Derivation tree the phenotype was assembled from.
        codons_used: Number of codons read, counting re-reads after wrapping.
        wraps: Number of times the reader wrapped around the genome.
    """

    phenotype: Any
    tree: DerivationTree
    codons_used: int
    wraps: int


def _codons(genome: Sequence[int] | GenomeProvider) -> Sequence[int]:
    if isinstance(genome, GenomeProvider):
        return genome.codons()
    return genome


class DerivationEngine:
    """Derives phenotypes for one grammar and action table.

    The engine holds no per-derivation state, so one instance can map the
    genomes of a whole population, from several threads if needed.

    Args:
        grammar: Grammar to derive from.
        actions: Action name to function table.  Each action receives the
            assembled value of the subtree it post-processes.
        config: Derivation limits.

    Raises:
        UndefinedActionError: If the grammar uses an action name that is not
            in ``actions``.
    """

    def __init__(
        self,
        grammar: Grammar,
        actions: Mapping[str, Action] | None = None,
        config: DerivationConfig | None = None,
    ) -> None:
        self.grammar = grammar
        self._actions = dict(actions or {})
        self.config = config or DerivationConfig()

        missing = grammar.action_names() - set(self._actions)
        if missing:
            raise UndefinedActionError(
                f"Grammar uses unregistered actions: {sorted(missing)}"
            )

    @property
    def actions(self) -> Mapping[str, Action]:
        return MappingProxyType(self._actions)

    def map_genome(
        self,
        genome: Sequence[int] | GenomeProvider,
        start: str | None = None,
    ) -> MappingResult:
        """Map ``genome`` to an assembled phenotype.

        Args:
            genome: Codon sequence, or any object implementing
                :class:`~gramevo.protocols.GenomeProvider`.
            start: Rule to start from; defaults to ``config.start``.

        Raises:
            UndefinedRuleError: If a referenced rule does not exist.
            DerivationDepthExceeded: If a guard trips.
            ActionError: If an action raises.
        """
        reader = CodonReader(_codons(genome))
        root = Reference(start or self.config.start)
        try:
            tree = self.derive(root, reader)
        except RecursionError as exc:
            logger.debug("Interpreter recursion limit hit while deriving %r", root.name)
            raise DerivationDepthExceeded(
                "Interpreter recursion limit reached before max_depth",
                limit=self.config.max_depth,
            ) from exc
        return MappingResult(
            phenotype=assemble(tree),
            tree=tree,
            codons_used=reader.consumed,
            wraps=reader.wraps,
        )

    def map_text(
        self,
        genome: Sequence[int] | GenomeProvider,
        start: str | None = None,
        sep: str = "",
    ) -> str:
        """Map ``genome`` and concatenate the derived tokens."""
        return render(self.map_genome(genome, start).tree, sep)

    def derive(self, rule: RuleNode, reader: CodonReader, depth: int = 0) -> DerivationTree:
        """Recursively derive ``rule``, consuming codons from ``reader``."""
        max_depth = self.config.max_depth
        if depth > max_depth:
            logger.debug("Derivation depth %d exceeds max_depth=%d", depth, max_depth)
            raise DerivationDepthExceeded(
                f"Derivation depth {depth} exceeds max_depth={max_depth}",
                depth=depth,
                limit=max_depth,
            )

        if isinstance(rule, Terminal):
            return Leaf(rule.value)

        if isinstance(rule, SequenceNode):
            return Branch(tuple(self.derive(child, reader, depth + 1) for child in rule.children))

        if isinstance(rule, Alternation):
            return self._choose(rule, reader, depth)

        if isinstance(rule, Reference):
            return self._expand(rule.name, reader, depth)

        if isinstance(rule, ActionRef):
            tree = self._expand(rule.name, reader, depth)
            if rule.action is None:
                return tree
            return self._apply(rule.name, rule.action, tree)

        if isinstance(rule, Range):
            # Grammars normalise ranges; this covers nodes derived directly.
            return self._choose(normalize(rule), reader, depth)

        raise TypeError(f"Not a rule node: {rule!r}")

    def _choose(self, rule: Alternation, reader: CodonReader, depth: int) -> Choice:
        if not rule.children:
            raise GrammarError("Or requires at least one child")
        codon = reader.next()
        max_wraps = self.config.max_wraps
        if reader.wraps > max_wraps:
            logger.debug("Codon reader wrapped %d times, max_wraps=%d", reader.wraps, max_wraps)
            raise DerivationDepthExceeded(
                f"Genome wrapped {reader.wraps} times, exceeds max_wraps={max_wraps}",
                depth=depth,
                limit=max_wraps,
            )
        index = codon % len(rule.children)
        return Choice(codon, index, self.derive(rule.children[index], reader, depth + 1))

    def _expand(self, name: str, reader: CodonReader, depth: int) -> DerivationTree:
        tree = self.derive(self.grammar.rule(name), reader, depth + 1)
        action = self.grammar.action_for(name)
        if action is None:
            return tree
        return self._apply(name, action, tree)

    def _apply(self, rule: str, action: str, tree: DerivationTree) -> Applied:
        func = self._actions[action]
        try:
            value = func(assemble(tree))
        except Exception as exc:
            logger.debug("Action %r on rule %r raised %r", action, rule, exc)
            raise ActionError(
                f"Action {action!r} failed on rule {rule!r}: {exc}",
                action=action,
                rule=rule,
            ) from exc
        return Applied(rule, action, tree, value)


def map_genome(
    grammar: Grammar,
    genome: Sequence[int] | GenomeProvider,
    actions: Mapping[str, Action] | None = None,
    config: DerivationConfig | None = None,
    start: str | None = None,
) -> MappingResult:
    """One-shot convenience wrapper around :meth:`DerivationEngine.map_genome`."""
    return DerivationEngine(grammar, actions, config).map_genome(genome, start)
