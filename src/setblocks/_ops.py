"""Smalltalk-style block operations over sets.

Every operation reads its source set once, in the set's own iteration order,
which is unspecified and may differ between two traversals of the same set.
Nothing here mutates the source; set-valued results are new sets of the same
kind (see ``_new_like``). Mutating a source while an operation iterates it is
a caller error.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from collections.abc import Set as AbstractSet
from typing import Any

from setblocks._contracts import ensures, requires_block, requires_set
from setblocks._util import Acc, R, T, _new_like


def _within(source: AbstractSet[Any], result: AbstractSet[Any], **_: Any) -> bool:
    return len(result) <= len(source) and all(item in source for item in result)


@ensures(lambda result, **_: result is None)
@requires_set()
@requires_block()
def each(source: AbstractSet[T], block: Callable[[T], Any]) -> None:
    """Call ``block`` exactly once for every element."""
    for item in source:
        block(item)


@ensures(lambda source, default, result, **_: result is default or result in source)
@requires_set()
@requires_block()
def match(source: AbstractSet[T], block: Callable[[T], bool], *, default: Any = None) -> Any:
    """Return some element satisfying ``block``, or ``default`` if there is none.

    Scanning stops at the first element for which ``block`` is true. When
    several elements qualify, which one is returned is unspecified.
    """
    for item in source:
        if block(item):
            return item
    return default


@ensures(_within)
@requires_set()
@requires_block()
def select(source: AbstractSet[T], block: Callable[[T], bool]) -> AbstractSet[T]:
    """New set of the elements for which ``block`` is true (possibly empty)."""
    return _new_like(source, [item for item in source if block(item)])


@ensures(_within)
@requires_set()
@requires_block()
def reject(source: AbstractSet[T], block: Callable[[T], bool]) -> AbstractSet[T]:
    """New set of the elements for which ``block`` is false.

    ``select(s, p)`` and ``reject(s, p)`` partition ``s``.
    """
    return _new_like(source, [item for item in source if not block(item)])


@ensures(lambda source, result, **_: len(result) <= len(source))
@requires_set()
@requires_block()
def map(source: AbstractSet[T], block: Callable[[T], R]) -> AbstractSet[R]:
    """New set of ``block(item)`` for every element.

    The result is a set, so inputs that map to equal outputs collapse into a
    single element and ``len(map(s, f)) <= len(s)``. Results must be hashable.
    """
    return _new_like(source, [block(item) for item in source])


@ensures(lambda source, initial, result, **_: len(source) > 0 or result is initial)
@requires_set()
@requires_block()
def reduce(source: AbstractSet[T], initial: Acc, block: Callable[[Acc, T], Acc]) -> Acc:
    """Fold ``block(acc, item)`` over the set, starting from ``initial``.

    The fold order is unspecified, so ``block`` has to give the same final
    value under any order (``check_order_independent`` can search for a
    counterexample). An empty set returns ``initial`` itself.
    """
    return functools.reduce(block, source, initial)


@ensures(lambda result, **_: isinstance(result, bool))
@requires_set()
@requires_block()
def any_match(source: AbstractSet[T], block: Callable[[T], bool]) -> bool:
    return any(block(item) for item in source)


@ensures(lambda result, **_: isinstance(result, bool))
@requires_set()
@requires_block()
def all_match(source: AbstractSet[T], block: Callable[[T], bool]) -> bool:
    return all(block(item) for item in source)


@ensures(lambda result, **_: isinstance(result, bool))
@requires_set()
@requires_block()
def none_match(source: AbstractSet[T], block: Callable[[T], bool]) -> bool:
    return not any(block(item) for item in source)


OPERATIONS: dict[str, Callable[..., Any]] = {
    "each": each,
    "match": match,
    "select": select,
    "reject": reject,
    "map": map,
    "reduce": reduce,
    "any_match": any_match,
    "all_match": all_match,
    "none_match": none_match,
}
