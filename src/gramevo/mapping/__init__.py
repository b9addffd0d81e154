"""Genome to phenotype mapping."""

from gramevo.mapping.assemble import assemble, leaves, render  # noqa: F401
from gramevo.mapping.codons import CodonReader  # noqa: F401
from gramevo.mapping.engine import (  # noqa: F401
    DerivationEngine,
    MappingResult,
    map_genome,
)
from gramevo.mapping.tree import (  # noqa: F401
    Applied,
    Branch,
    Choice,
    DerivationTree,
    Leaf,
    count_nodes,
)
