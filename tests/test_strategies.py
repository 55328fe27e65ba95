"""Tests for the hypothesis strategies used by the law checker."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from setblocks._strategies import (
    _ELEMENT_OVERRIDES,
    ELEMENT_KINDS,
    element_strategy,
    predicates,
    register_element_strategy,
    sets_of,
)


class TestElementStrategy:
    @given(st.data())
    def test_known_kinds_are_hashable(self, data):
        for tp in ELEMENT_KINDS.values():
            hash(data.draw(element_strategy(tp)))

    @given(element_strategy(float))
    def test_floats_exclude_nan(self, x):
        assert x == x

    @given(element_strategy(tuple[int, str]))
    def test_tuple(self, t):
        assert isinstance(t, tuple) and isinstance(t[0], int) and isinstance(t[1], str)

    @given(element_strategy(frozenset[int]))
    def test_frozenset(self, fs):
        assert isinstance(fs, frozenset)

    @given(element_strategy(int | None))
    def test_optional(self, x):
        assert x is None or isinstance(x, int)

    def test_unhashable_rejected(self):
        with pytest.raises(TypeError, match="no hashable element strategy"):
            element_strategy(list[int])

    def test_register_override(self):
        class Color:
            pass

        strat = st.sampled_from(["red", "green"])
        register_element_strategy(Color, strat)
        try:
            assert element_strategy(Color) is strat
        finally:
            _ELEMENT_OVERRIDES.pop(Color, None)


class TestSetsAndBlocks:
    @given(sets_of(st.integers(), min_size=1, max_size=3))
    def test_sets_of_bounds(self, s):
        assert isinstance(s, set) and 1 <= len(s) <= 3

    @given(predicates(), st.integers())
    def test_predicates_are_pure(self, pred, x):
        assert pred(x) is pred(x)
        assert isinstance(pred(x), bool)
