"""Exception hierarchy for gramevo.

All exceptions inherit from :class:`GrammaticalEvolutionError`.  Consumers can
catch ``GrammaticalEvolutionError`` for a blanket handler or individual
subclasses for fine-grained control.

Two families matter for an evolutionary run:

- :class:`GrammarError` and its subclasses indicate a defect in the grammar
  or action table.  They are never absorbed by the per-individual evaluation
  boundary and should abort the run.
- :class:`DerivationDepthExceeded` and :class:`ActionError` indicate that a
  single genome could not be mapped.  The evaluation boundary converts them
  into a worst-case fitness so the run can continue.
"""

from __future__ import annotations


class GrammaticalEvolutionError(Exception):
    """Base exception for all gramevo errors."""


class GrammarError(GrammaticalEvolutionError):
    """Raised when a grammar specification is malformed.

    Trigger conditions:

    - No rule named ``start``.
    - Two rules share the same name.
    - An empty rule name, an empty ``Or``/``And``, or a ``Range`` whose
      lower bound exceeds its upper bound.
    """


class UndefinedRuleError(GrammarError):
    """Raised when a reference names a rule absent from the grammar.

    Detected lazily at derivation time because grammars may be recursive,
    but it is a construction defect and is never treated as a bad genome.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        super().__init__(f"Undefined rule: {name!r}" if name else "Undefined rule")


class UndefinedActionError(GrammarError):
    """Raised when a grammar uses an action name missing from the action table."""


class DerivationError(GrammaticalEvolutionError):
    """Base class for failures while mapping one genome."""


class DerivationDepthExceeded(DerivationError):
    """Raised when the recursion depth or codon wrap guard trips.

    Attributes:
        depth: Depth at which the guard tripped, when known.
        limit: The configured limit that was exceeded, when known.
    """

    def __init__(
        self,
        message: str = "",
        *,
        depth: int | None = None,
        limit: int | None = None,
    ) -> None:
        self.depth = depth
        self.limit = limit
        super().__init__(message)


class GenomeExhaustedError(DerivationDepthExceeded):
    """Raised when a codon is requested from an empty genome."""


class ActionError(DerivationError):
    """Raised when a registered action fails during derivation.

    The original exception is chained as ``__cause__``.

    Attributes:
        action: Name of the failing action.
        rule: Name of the rule the action was attached to.
    """

    def __init__(self, message: str = "", *, action: str = "", rule: str = "") -> None:
        self.action = action
        self.rule = rule
        super().__init__(message)


class GenomeError(GrammaticalEvolutionError):
    """Raised when a genome contains negative or non-integer codons."""


class CompilationError(GrammaticalEvolutionError):
    """Raised when an expression tree cannot be turned into a callable.

    Trigger conditions:

    - An operator name missing from the operator table.
    - A call whose argument count does not match the operator arity.
    - A variable that is not among the declared argument names.
    """


class EvaluationError(GrammaticalEvolutionError):
    """Raised when a fitness function fails on an assembled phenotype."""


class ConfigurationError(GrammaticalEvolutionError):
    """Raised when gramevo configuration is invalid.

    Raised at construction time (fail-fast) so invalid configs never
    reach the derivation engine.
    """


class ParallelExecutionError(GrammaticalEvolutionError):
    """Raised on parallel backend failures."""
