"""Evaluation of individuals: genomes, the failure boundary and batching."""

from gramevo.evaluation.boundary import PhenotypeEvaluator  # noqa: F401
from gramevo.evaluation.individual import (  # noqa: F401
    Genome,
    Individual,
    random_genome,
    random_genomes,
)
from gramevo.evaluation.parallel import ParallelEvaluator  # noqa: F401
