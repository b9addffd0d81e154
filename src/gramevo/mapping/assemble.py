"""Phenotype assembly from finished derivation trees.

Assembly performs no grammar lookups and never fails: every failure mode is
handled by the derivation engine before a tree exists.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from gramevo.mapping.tree import Applied, Branch, Choice, DerivationTree, Leaf


def assemble(tree: DerivationTree) -> Any:
    """Convert a derivation tree to its structured phenotype.

    Leaves become their raw value, sequences become lists of their children's
    assembled values, choices are transparent, and action results pass
    through unchanged.
    """
    if isinstance(tree, Leaf):
        return tree.value
    if isinstance(tree, Applied):
        return tree.value
    if isinstance(tree, Choice):
        return assemble(tree.child)
    return [assemble(child) for child in tree.children]


def render(tree: DerivationTree, sep: str = "") -> str:
    """Concatenate the textual form of every leaf and action value in order."""
    return sep.join(str(value) for value in leaves(tree))


def leaves(tree: DerivationTree) -> Iterator[Any]:
    """Yield leaf values and action results in derivation order."""
    if isinstance(tree, (Leaf, Applied)):
        yield tree.value
    elif isinstance(tree, Choice):
        yield from leaves(tree.child)
    elif isinstance(tree, Branch):
        for child in tree.children:
            yield from leaves(child)
