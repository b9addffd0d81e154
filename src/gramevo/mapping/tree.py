"""Derivation tree nodes produced by the derivation engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class Leaf:
    """A derived terminal."""

    value: Any


@dataclass(frozen=True)
class Branch:
    """A derived sequence; children keep grammar order."""

    children: tuple[DerivationTree, ...]


@dataclass(frozen=True)
class Choice:
    """The single alternative selected at a choice point.

    Attributes:
        codon: Codon consumed at this choice point.
        index: Selected alternative, ``codon % number_of_alternatives``.
        child: Derivation of the selected alternative.
    """

    codon: int
    index: int
    child: DerivationTree


@dataclass(frozen=True)
class Applied:
    """A subtree replaced by the return value of an action.

    Attributes:
        rule: Rule the action was attached to.
        action: Name of the action that fired.
        child: Derivation the action consumed.
        value: Action return value.
    """

    rule: str
    action: str
    child: DerivationTree
    value: Any


DerivationTree: TypeAlias = Leaf | Branch | Choice | Applied


def count_nodes(tree: DerivationTree) -> int:
    total = 0
    stack: list[DerivationTree] = [tree]
    while stack:
        node = stack.pop()
        total += 1
        if isinstance(node, Branch):
            stack.extend(node.children)
        elif isinstance(node, (Choice, Applied)):
            stack.append(node.child)
    return total
