#!/usr/bin/env python3
"""Random-search symbolic regression with gramevo.

This example demonstrates the full mapping workflow:
  1. Declare an expression grammar with a ``call`` action
  2. Draw a population of random genomes
  3. Map each genome to an inert expression tree and compile it
  4. Score it against a target function, with worst fitness for invalid genomes
  5. Print the best expression found

Selection and variation are deliberately left out: gramevo provides the
mapping and evaluation boundary, the search loop is up to the caller.

Run:
    python examples/symbolic_regression.py
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from gramevo import (
    And,
    DerivationConfig,
    EvaluationConfig,
    GenomeConfig,
    Individual,
    Or,
    ParallelEvaluator,
    PhenotypeEvaluator,
    Ref,
    Variable,
    as_expression,
    binary_call,
    build_grammar,
    compile_expression,
    random_genomes,
    to_source,
)

GRAMMAR = build_grammar(
    [
        ("start", Ref("ex")),
        ("ex", Or(Ref("binop"), Ref("var"), Ref("const"))),
        ("binop", And(Ref("ex"), Ref("op"), Ref("ex")), "call"),
        ("op", Or("+", "-", "*", "/")),
        ("var", Variable("x")),
        ("const", Or(1.0, 2.0, 3.0, 5.0)),
    ]
)

X = np.linspace(-2.0, 2.0, 41)
TARGET = X * X + 2.0 * X + 1.0


def mean_squared_error(expr: Any) -> float:
    program = compile_expression(as_expression(expr), ["x"])
    prediction = np.broadcast_to(program(X), X.shape)
    return float(np.mean((prediction - TARGET) ** 2))


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    evaluator = PhenotypeEvaluator(
        GRAMMAR,
        mean_squared_error,
        actions={"call": binary_call},
        config=EvaluationConfig(derivation=DerivationConfig(max_depth=40, max_wraps=1)),
    )
    genomes = random_genomes(500, GenomeConfig(length=40, codon_max=256, seed=7))
    population = [Individual(genome) for genome in genomes]

    ParallelEvaluator(evaluator=evaluator).evaluate_batch(population)

    valid = [ind for ind in population if ind.phenotype is not None]
    best = min(valid, key=lambda ind: ind.fitness)
    print(f"valid individuals: {len(valid)}/{len(population)}")
    print(f"best expression:   {to_source(as_expression(best.phenotype))}")
    print(f"best MSE:          {best.fitness:.4f}")


if __name__ == "__main__":
    main()
