"""Grammar model and construction."""

from gramevo.grammar.grammar import (  # noqa: F401
    START,
    Grammar,
    RuleSpec,
    build_grammar,
    normalize,
)
from gramevo.grammar.rules import (  # noqa: F401
    ActionRef,
    Alternation,
    And,
    Or,
    Range,
    Ref,
    Reference,
    RuleNode,
    Sequence,
    Terminal,
    as_rule,
    lit,
    references,
    walk,
)
