"""Property checks for the block operations, driven by hypothesis.

``check_laws`` runs every law in ``LAWS`` over generated sets and generated
pure predicates/transforms, the same way a caller's test suite would.
``check_order_independent`` and ``check_injective`` check the two properties
that the operations leave to the caller: an accumulator whose fold does not
depend on iteration order, and a transform that keeps ``map`` from collapsing
elements.
"""

from __future__ import annotations

import copy
import dataclasses
import functools
import logging
import time
from collections import Counter
from collections.abc import Callable
from typing import Any

from hypothesis import HealthCheck, find, given, settings
from hypothesis import strategies as st
from hypothesis.errors import NoSuchExample, Unsatisfiable

from setblocks import _ops
from setblocks._strategies import accumulators, predicates, sets_of, transforms
from setblocks._util import _jsonable

logger = logging.getLogger(__name__)

_SUPPRESS = (HealthCheck.too_slow, HealthCheck.filter_too_much)

ArgumentBuilder = Callable[[st.SearchStrategy[Any]], st.SearchStrategy[Any]]


@dataclasses.dataclass
class LawResult:
    law: str
    status: str  # "pass" | "fail" | "error"
    details: dict[str, Any]
    duration_s: float = 0.0

    def to_json(self) -> dict[str, Any]:
        return {
            "law": self.law,
            "status": self.status,
            "details": self.details,
            "duration_s": round(self.duration_s, 3),
        }


@dataclasses.dataclass(frozen=True)
class Law:
    name: str
    description: str
    check: Callable[..., None]
    arguments: dict[str, ArgumentBuilder]


LAWS: dict[str, Law] = {}


def _law(
    name: str, description: str, **arguments: ArgumentBuilder
) -> Callable[[Callable[..., None]], Callable[..., None]]:
    def deco(fn: Callable[..., None]) -> Callable[..., None]:
        LAWS[name] = Law(name, description, fn, arguments)
        return fn

    return deco


def _sets(elements: st.SearchStrategy[Any]) -> st.SearchStrategy[set[Any]]:
    return sets_of(elements)


def _nonempty_sets(elements: st.SearchStrategy[Any]) -> st.SearchStrategy[set[Any]]:
    return sets_of(elements, min_size=1)


def _predicates(_: st.SearchStrategy[Any]) -> st.SearchStrategy[Any]:
    return predicates()


# ---------------------------------------------------------------------------
# laws
# ---------------------------------------------------------------------------

@_law(
    "select_reject_partition",
    "select(S, p) | reject(S, p) == S and select(S, p) & reject(S, p) is empty",
    source=_sets,
    block=_predicates,
)
def _select_reject_partition(source: set[Any], block: Callable[[Any], bool]) -> None:
    kept = _ops.select(source, block)
    dropped = _ops.reject(source, block)
    assert kept | dropped == source, f"union {kept | dropped!r} != source"
    assert not kept & dropped, f"overlap {kept & dropped!r}"


@_law(
    "match_soundness",
    "match returns a member satisfying p, or the default iff no member does",
    source=_sets,
    block=_predicates,
)
def _match_soundness(source: set[Any], block: Callable[[Any], bool]) -> None:
    missing = object()
    found = _ops.match(source, block, default=missing)
    satisfying = [item for item in source if block(item)]
    if found is missing:
        assert not satisfying, f"default returned but {satisfying!r} satisfy the predicate"
    else:
        assert found in source, f"{found!r} is not a member"
        assert block(found), f"{found!r} does not satisfy the predicate"


@_law(
    "match_short_circuit",
    "match stops calling the predicate after the first success",
    source=_sets,
)
def _match_short_circuit(source: set[Any]) -> None:
    calls = []

    def always(item: Any) -> bool:
        calls.append(item)
        return True

    _ops.match(source, always)
    assert len(calls) == min(len(source), 1), f"predicate called {len(calls)} times"


@_law(
    "map_injective_cardinality",
    "an injective transform preserves cardinality",
    source=_sets,
)
def _map_injective_cardinality(source: set[Any]) -> None:
    mapped = _ops.map(source, lambda item: (item,))
    assert len(mapped) == len(source), f"{len(mapped)} != {len(source)}"


@_law(
    "map_constant_collapse",
    "a constant transform over a non-empty set yields exactly {c}",
    source=_nonempty_sets,
    constant=lambda elements: elements,
)
def _map_constant_collapse(source: set[Any], constant: Any) -> None:
    mapped = _ops.map(source, lambda _: constant)
    assert mapped == {constant}, f"{mapped!r} != {{{constant!r}}}"


@_law(
    "map_image",
    "map(S, f) is the image {f(x) for x in S} and never larger than S",
    source=_sets,
    block=lambda elements: transforms(elements),
)
def _map_image(source: set[Any], block: Callable[[Any], Any]) -> None:
    mapped = _ops.map(source, block)
    assert mapped == {block(item) for item in source}, f"{mapped!r} is not the image"
    assert len(mapped) <= len(source)


@_law(
    "each_visits_once",
    "each calls its block exactly once per element",
    source=_sets,
)
def _each_visits_once(source: set[Any]) -> None:
    seen: Counter[Any] = Counter()
    _ops.each(source, lambda item: seen.update([item]))
    assert sum(seen.values()) == len(source), f"{sum(seen.values())} calls for {len(source)} elements"
    assert set(seen) == source and all(n == 1 for n in seen.values()), f"visits {dict(seen)!r}"


@_law(
    "reduce_empty_identity",
    "reduce over the empty set returns the initial value itself",
    initial=lambda elements: elements,
    block=lambda elements: accumulators(elements),
)
def _reduce_empty_identity(initial: Any, block: Callable[[Any, Any], Any]) -> None:
    assert _ops.reduce(set(), initial, block) is initial


@_law(
    "reduce_counts",
    "reduce(S, 0, lambda n, _: n + 1) == len(S)",
    source=_sets,
)
def _reduce_counts(source: set[Any]) -> None:
    total = _ops.reduce(source, 0, lambda n, _: n + 1)
    assert total == len(source), f"{total} != {len(source)}"


@_law(
    "quantifiers_agree",
    "any_match, all_match and none_match agree with match and select",
    source=_sets,
    block=_predicates,
)
def _quantifiers_agree(source: set[Any], block: Callable[[Any], bool]) -> None:
    missing = object()
    some = _ops.match(source, block, default=missing) is not missing
    assert _ops.any_match(source, block) is some
    assert _ops.none_match(source, block) is (not some)
    assert _ops.all_match(source, block) is (len(_ops.select(source, block)) == len(source))


@_law(
    "source_unchanged",
    "no operation mutates its source set",
    source=_sets,
    block=_predicates,
)
def _source_unchanged(source: set[Any], block: Callable[[Any], bool]) -> None:
    snapshot = frozenset(source)
    _ops.each(source, block)
    _ops.match(source, block)
    _ops.select(source, block)
    _ops.reject(source, block)
    _ops.map(source, block)
    _ops.reduce(source, 0, lambda n, item: n + bool(block(item)))
    assert source == snapshot, f"{source!r} changed from {snapshot!r}"


# ---------------------------------------------------------------------------
# runner
# ---------------------------------------------------------------------------

def _run_law(law: Law, elements: st.SearchStrategy[Any], *, max_examples: int) -> LawResult:
    t0 = time.monotonic()
    strat = st.fixed_dictionaries({name: build(elements) for name, build in law.arguments.items()})

    # Mutable container to capture the shrunk counterexample from Hypothesis
    shrunk_ce: list[dict[str, Any] | None] = [None]

    @settings(
        max_examples=max_examples,
        deadline=None,
        suppress_health_check=list(_SUPPRESS),
        database=None,
    )
    @given(strat)
    def prop(kwargs: dict[str, Any]) -> None:
        try:
            law.check(**kwargs)
        except AssertionError as e:
            shrunk_ce[0] = {"kwargs": _jsonable(kwargs), "error": str(e)}
            raise

    try:
        prop()
    except Exception as e:
        if shrunk_ce[0] is not None:
            logger.warning("law %s failed: %s", law.name, shrunk_ce[0]["error"])
            return LawResult(
                law.name, "fail",
                {"description": law.description, "counterexample": shrunk_ce[0]},
                duration_s=time.monotonic() - t0,
            )
        logger.warning("law %s errored: %s: %s", law.name, type(e).__name__, e)
        return LawResult(
            law.name, "error",
            {"description": law.description, "error": f"{type(e).__name__}: {e}"},
            duration_s=time.monotonic() - t0,
        )

    return LawResult(
        law.name, "pass",
        {"description": law.description, "max_examples": max_examples},
        duration_s=time.monotonic() - t0,
    )


def check_laws(
    elements: st.SearchStrategy[Any] | None = None,
    *,
    max_examples: int = 100,
    laws: list[str] | None = None,
    on_result: Callable[[LawResult], None] | None = None,
) -> list[LawResult]:
    """Run the named laws (all of them by default) over sets drawn from ``elements``."""
    if elements is None:
        elements = st.integers()
    names = list(LAWS) if laws is None else laws
    unknown = [n for n in names if n not in LAWS]
    if unknown:
        raise KeyError(f"unknown laws: {', '.join(unknown)}")

    results: list[LawResult] = []
    for name in names:
        logger.debug("checking law %s (max_examples=%d)", name, max_examples)
        result = _run_law(LAWS[name], elements, max_examples=max_examples)
        results.append(result)
        if on_result is not None:
            on_result(result)
    return results


# ---------------------------------------------------------------------------
# caller-side preconditions
# ---------------------------------------------------------------------------

def _fold(block: Callable[[Any, Any], Any], order: list[Any], initial: Any) -> Any:
    return functools.reduce(block, order, copy.deepcopy(initial))


def check_order_independent(
    block: Callable[[Any, Any], Any],
    initial: Any,
    elements: st.SearchStrategy[Any],
    *,
    eq: Callable[[Any, Any], bool] | None = None,
    max_examples: int = 200,
    max_size: int = 8,
) -> dict[str, Any] | None:
    """Search for two iteration orders of one set that ``reduce`` folds differently.

    ``initial`` is deep-copied for every fold. Returns a JSON-able
    counterexample, or ``None`` if none was found. Exceptions raised by
    ``block`` propagate unchanged.
    """
    same = eq or (lambda a, b: a == b)
    orders = st.lists(elements, unique=True, min_size=2, max_size=max_size).flatmap(
        lambda xs: st.tuples(st.just(xs), st.permutations(xs))
    )

    def differs(pair: tuple[list[Any], list[Any]]) -> bool:
        first, second = pair
        return not same(_fold(block, first, initial), _fold(block, second, initial))

    try:
        first, second = find(
            orders,
            differs,
            settings=settings(max_examples=max_examples, database=None, suppress_health_check=list(_SUPPRESS)),
        )
    except (NoSuchExample, Unsatisfiable):
        return None

    ce = {
        "order_a": _jsonable(first),
        "order_b": _jsonable(second),
        "result_a": _jsonable(_fold(block, first, initial)),
        "result_b": _jsonable(_fold(block, second, initial)),
    }
    logger.debug("order-dependent fold: %r", ce)
    return ce


def check_injective(
    block: Callable[[Any], Any],
    elements: st.SearchStrategy[Any],
    *,
    max_examples: int = 200,
) -> dict[str, Any] | None:
    """Search for two distinct elements that ``block`` maps to the same value.

    Such a pair is exactly what makes ``map`` return a smaller set.
    """
    pairs = st.tuples(elements, elements).filter(lambda p: p[0] != p[1])
    try:
        a, b = find(
            pairs,
            lambda p: block(p[0]) == block(p[1]),
            settings=settings(max_examples=max_examples, database=None, suppress_health_check=list(_SUPPRESS)),
        )
    except (NoSuchExample, Unsatisfiable):
        return None
    return {"a": _jsonable(a), "b": _jsonable(b), "output": _jsonable(block(a))}
