"""
gramevo: Grammatical Evolution mapping engine.

Integer genomes are mapped deterministically through a context-free grammar
into phenotypes: text, nested values, or inert expression trees that compile
to callables.  Population management and selection are left to the caller;
this package provides the grammar model, the derivation engine, and the
per-individual evaluation boundary that turns unmappable genomes into a
worst-case fitness.
"""

from gramevo.config import (
    DerivationConfig,
    EvaluationConfig,
    GenomeConfig,
    ParallelConfig,
)
from gramevo.errors import (
    ActionError,
    CompilationError,
    ConfigurationError,
    DerivationDepthExceeded,
    DerivationError,
    EvaluationError,
    GenomeError,
    GenomeExhaustedError,
    GrammarError,
    GrammaticalEvolutionError,
    ParallelExecutionError,
    UndefinedActionError,
    UndefinedRuleError,
)
from gramevo.evaluation import (
    Genome,
    Individual,
    ParallelEvaluator,
    PhenotypeEvaluator,
    random_genome,
    random_genomes,
)
from gramevo.grammar import (
    ActionRef,
    Alternation,
    And,
    Grammar,
    Or,
    Range,
    Ref,
    Reference,
    RuleSpec,
    Sequence,
    Terminal,
    build_grammar,
    lit,
)
from gramevo.mapping import (
    CodonReader,
    DerivationEngine,
    MappingResult,
    assemble,
    map_genome,
    render,
)
from gramevo.program import (
    Call,
    Literal,
    TreeCompiler,
    Variable,
    as_expression,
    binary_call,
    compile_expression,
    prefix_call,
    to_source,
)
from gramevo.protocols import (
    Compiler,
    FitnessFunction,
    GenomeProvider,
    PhenotypeSink,
)

__all__ = [
    # Configuration
    "DerivationConfig",
    "EvaluationConfig",
    "GenomeConfig",
    "ParallelConfig",
    # Protocols
    "Compiler",
    "FitnessFunction",
    "GenomeProvider",
    "PhenotypeSink",
    # Grammar
    "ActionRef",
    "Alternation",
    "And",
    "Grammar",
    "Or",
    "Range",
    "Ref",
    "Reference",
    "RuleSpec",
    "Sequence",
    "Terminal",
    "build_grammar",
    "lit",
    # Mapping
    "CodonReader",
    "DerivationEngine",
    "MappingResult",
    "assemble",
    "map_genome",
    "render",
    # Programs
    "Call",
    "Literal",
    "TreeCompiler",
    "Variable",
    "as_expression",
    "binary_call",
    "compile_expression",
    "prefix_call",
    "to_source",
    # Evaluation
    "Genome",
    "Individual",
    "ParallelEvaluator",
    "PhenotypeEvaluator",
    "random_genome",
    "random_genomes",
    # Errors
    "GrammaticalEvolutionError",
    "GrammarError",
    "UndefinedRuleError",
    "UndefinedActionError",
    "DerivationError",
    "DerivationDepthExceeded",
    "GenomeExhaustedError",
    "ActionError",
    "GenomeError",
    "CompilationError",
    "EvaluationError",
    "ConfigurationError",
    "ParallelExecutionError",
]

__version__ = "0.1.0"
