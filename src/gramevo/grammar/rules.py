"""Rule model: the right-hand side of a grammar rule.

A right-hand side is a tree of :data:`RuleNode` values.  ``Sequence`` and
``Alternation`` hold ordered children; ``Reference`` and ``ActionRef`` point
at other rules by name and are resolved against a grammar only when a
derivation reaches them.

The combinators :func:`Or`, :func:`And` and :func:`Ref` are the declarative
surface used to write grammars::

    ("ex", Or(Ref("number"), And(Ref("ex"), "+", Ref("ex"))))

Anything passed to ``Or``/``And`` that is not already a rule node becomes a
:class:`Terminal`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class Terminal:
    """A literal value emitted unchanged."""

    value: Any


@dataclass(frozen=True)
class Range:
    """Inclusive integer range ``low..high``.

    Normalised into an :class:`Alternation` of :class:`Terminal` values when
    the owning grammar is built.
    """

    low: int
    high: int

    def expand(self) -> Alternation:
        return Alternation(tuple(Terminal(i) for i in range(self.low, self.high + 1)))


@dataclass(frozen=True)
class Sequence:
    """Ordered concatenation of children; consumes no codon."""

    children: tuple[RuleNode, ...]


@dataclass(frozen=True)
class Alternation:
    """Choice point; one codon selects ``children[codon % len(children)]``."""

    children: tuple[RuleNode, ...]


@dataclass(frozen=True)
class Reference:
    """Reference to another rule by name."""

    name: str


@dataclass(frozen=True)
class ActionRef:
    """Reference whose derived value is post-processed by a named action.

    With ``action=None`` it behaves exactly like :class:`Reference`.
    """

    name: str
    action: str | None = None


RuleNode: TypeAlias = Terminal | Range | Sequence | Alternation | Reference | ActionRef

_NODE_TYPES = (Terminal, Range, Sequence, Alternation, Reference, ActionRef)


def is_rule_node(item: Any) -> bool:
    return isinstance(item, _NODE_TYPES)


def as_rule(item: Any) -> RuleNode:
    """Coerce ``item`` to a rule node, wrapping plain values in :class:`Terminal`."""
    if is_rule_node(item):
        return item
    return Terminal(item)


def Or(*items: Any) -> Alternation:  # noqa: N802
    """Build an alternation from rule nodes or literal values."""
    return Alternation(tuple(as_rule(item) for item in items))


def And(*items: Any) -> Sequence:  # noqa: N802
    """Build a sequence from rule nodes or literal values."""
    return Sequence(tuple(as_rule(item) for item in items))


def Ref(name: str, action: str | None = None) -> Reference | ActionRef:  # noqa: N802
    """Reference rule ``name``, optionally through ``action``."""
    if action is None:
        return Reference(name)
    return ActionRef(name, action)


def lit(value: Any) -> Terminal:
    """Literal terminal, for values that would otherwise be read as rule nodes."""
    return Terminal(value)


def walk(node: RuleNode) -> Iterator[RuleNode]:
    """Yield ``node`` and all of its descendants depth-first, pre-order."""
    stack: list[RuleNode] = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, (Sequence, Alternation)):
            stack.extend(reversed(current.children))


def references(node: RuleNode) -> Iterator[str]:
    """Yield the names of all rules referenced inside ``node``."""
    for item in walk(node):
        if isinstance(item, (Reference, ActionRef)):
            yield item.name
