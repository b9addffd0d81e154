"""Grammar value and its construction from declarative rule specs."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from gramevo.errors import GrammarError, UndefinedRuleError
from gramevo.grammar.rules import (
    ActionRef,
    Alternation,
    Range,
    RuleNode,
    Sequence,
    as_rule,
    references,
    walk,
)

START = "start"


@dataclass(frozen=True)
class RuleSpec:
    """One declarative rule: ``name = rhs`` with an optional action.

    Attributes:
        name: Rule name, unique within a grammar.
        rhs: Right-hand side; plain values are treated as terminals.
        action: Name of an action applied whenever the rule is referenced.
    """

    name: str
    rhs: Any
    action: str | None = None


def _to_spec(item: RuleSpec | tuple[Any, ...]) -> RuleSpec:
    if isinstance(item, RuleSpec):
        return item
    if isinstance(item, tuple) and len(item) in (2, 3):
        return RuleSpec(*item)
    raise GrammarError(
        f"Rule specs must be RuleSpec or (name, rhs[, action]) tuples, got {item!r}"
    )


def normalize(node: RuleNode, rule: str = "") -> RuleNode:
    """Validate ``node`` and replace every :class:`Range` with an alternation.

    Raises:
        GrammarError: On empty sequences/alternations or inverted ranges.
    """
    if isinstance(node, Range):
        if node.low > node.high:
            raise GrammarError(
                f"Rule {rule!r}: range {node.low}:{node.high} has low > high"
            )
        return node.expand()
    if isinstance(node, (Sequence, Alternation)):
        if not node.children:
            kind = "And" if isinstance(node, Sequence) else "Or"
            raise GrammarError(f"Rule {rule!r}: {kind} requires at least one child")
        return type(node)(tuple(normalize(child, rule) for child in node.children))
    return node


class Grammar:
    """Immutable mapping from rule name to right-hand side.

    Build grammars with :meth:`from_specs` (or :func:`build_grammar`).  The
    rule and action tables are exposed as read-only mapping proxies so a
    single grammar can be shared by every derivation in a population.
    """

    __slots__ = ("_rules", "_actions")

    def __init__(
        self,
        rules: Mapping[str, RuleNode],
        actions: Mapping[str, str] | None = None,
    ) -> None:
        if START not in rules:
            raise GrammarError(f"Grammar requires a rule named {START!r}")
        self._rules = MappingProxyType(dict(rules))
        self._actions = MappingProxyType(dict(actions or {}))

    @classmethod
    def from_specs(cls, specs: Iterable[RuleSpec | tuple[Any, ...]]) -> Grammar:
        """Build a grammar from ``(name, rhs[, action])`` specs.

        Raises:
            GrammarError: If a rule name is empty or duplicated, if there is
                no ``start`` rule, or if a right-hand side is malformed.
        """
        rules: dict[str, RuleNode] = {}
        actions: dict[str, str] = {}
        for item in specs:
            spec = _to_spec(item)
            if not isinstance(spec.name, str) or not spec.name:
                raise GrammarError(f"Rule name must be a non-empty string: {spec.name!r}")
            if spec.name in rules:
                raise GrammarError(f"Duplicate rule name: {spec.name!r}")
            rules[spec.name] = normalize(as_rule(spec.rhs), spec.name)
            if spec.action is not None:
                actions[spec.name] = spec.action
        return cls(rules, actions)

    @property
    def start(self) -> str:
        return START

    @property
    def rules(self) -> Mapping[str, RuleNode]:
        return self._rules

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._rules)

    def rule(self, name: str) -> RuleNode:
        """Return the right-hand side of ``name``.

        Raises:
            UndefinedRuleError: If the grammar has no such rule.
        """
        try:
            return self._rules[name]
        except KeyError:
            raise UndefinedRuleError(name) from None

    def action_for(self, name: str) -> str | None:
        """Action attached to rule ``name`` at declaration, if any."""
        return self._actions.get(name)

    def action_names(self) -> set[str]:
        """All action names used by rule declarations and ``ActionRef`` nodes."""
        names = set(self._actions.values())
        for root in self._rules.values():
            for node in walk(root):
                if isinstance(node, ActionRef) and node.action is not None:
                    names.add(node.action)
        return names

    def unresolved(self) -> set[str]:
        """Names referenced somewhere in the grammar but never defined."""
        missing: set[str] = set()
        for root in self._rules.values():
            missing.update(name for name in references(root) if name not in self._rules)
        return missing

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __reduce__(self) -> tuple[Any, ...]:
        # mapping proxies do not pickle; rebuild from plain dicts
        return (type(self), (dict(self._rules), dict(self._actions)))

    def __repr__(self) -> str:
        return f"Grammar(rules={list(self._rules)!r})"


def build_grammar(specs: Iterable[RuleSpec | tuple[Any, ...]]) -> Grammar:
    """Build a :class:`Grammar` from declarative rule specs."""
    return Grammar.from_specs(specs)
