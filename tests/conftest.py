"""Shared test fixtures for gramevo."""

from __future__ import annotations

import pytest

from gramevo.grammar import And, Grammar, Or, Range, Ref, build_grammar


@pytest.fixture
def sum_grammar() -> Grammar:
    """``ex = number | ex '+' ex`` over single digits."""
    return build_grammar(
        [
            ("start", Ref("ex")),
            ("ex", Or(Ref("number"), And(Ref("ex"), "+", Ref("ex")))),
            ("number", Range(0, 9)),
        ]
    )


@pytest.fixture
def digit_grammar() -> Grammar:
    """``number[double] = digit`` with ``digit = 0:9``."""
    return build_grammar(
        [
            ("start", Ref("number")),
            ("number", Ref("digit"), "double"),
            ("digit", Range(0, 9)),
        ]
    )
