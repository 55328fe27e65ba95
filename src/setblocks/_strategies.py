from __future__ import annotations

import types
from collections.abc import Hashable
from typing import Any, Union, get_args, get_origin

from hypothesis import strategies as st

_ELEMENT_OVERRIDES: dict[Any, st.SearchStrategy[Any]] = {}

ELEMENT_KINDS: dict[str, Any] = {
    "int": int,
    "str": str,
    "float": float,
    "bytes": bytes,
    "tuple": tuple[int, str],
}


def register_element_strategy(tp: Any, strat: st.SearchStrategy[Any]) -> None:
    _ELEMENT_OVERRIDES[tp] = strat


def element_strategy(tp: Any = int, *, depth: int = 0) -> st.SearchStrategy[Any]:
    """Strategy for hashable set elements of type ``tp``.

    Floats exclude NaN: ``nan != nan`` would break every membership law.
    """
    if tp in _ELEMENT_OVERRIDES:
        return _ELEMENT_OVERRIDES[tp]
    if depth > 3:
        return st.none()

    origin = get_origin(tp)
    args = get_args(tp)

    if tp is int:
        return st.integers()
    if tp is float:
        return st.floats(allow_nan=False)
    if tp is bool:
        return st.booleans()
    if tp is str:
        return st.text()
    if tp is bytes:
        return st.binary()
    if tp is None or tp is type(None):
        return st.none()

    if origin is Union or origin is types.UnionType:
        return st.one_of(*[element_strategy(a, depth=depth + 1) for a in args])

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return st.lists(element_strategy(args[0], depth=depth + 1), max_size=5).map(tuple)
        return st.tuples(*[element_strategy(a, depth=depth + 1) for a in args])

    if origin is frozenset:
        (elem,) = args if args else (int,)
        return st.frozensets(element_strategy(elem, depth=depth + 1), max_size=5)

    if origin is not None:
        raise TypeError(f"no hashable element strategy for {tp!r}")

    if isinstance(tp, type) and issubclass(tp, Hashable) and tp is not object:
        return st.from_type(tp)

    raise TypeError(f"no hashable element strategy for {tp!r}")


def sets_of(
    elements: st.SearchStrategy[Any], *, min_size: int = 0, max_size: int = 20
) -> st.SearchStrategy[set[Any]]:
    return st.sets(elements, min_size=min_size, max_size=max_size)


def predicates() -> st.SearchStrategy[Any]:
    """Pure ``item -> bool`` functions: equal inputs always give equal answers."""
    return st.functions(like=lambda item: False, returns=st.booleans(), pure=True)


def transforms(returns: st.SearchStrategy[Any]) -> st.SearchStrategy[Any]:
    return st.functions(like=lambda item: None, returns=returns, pure=True)


def accumulators(returns: st.SearchStrategy[Any]) -> st.SearchStrategy[Any]:
    # not pure: the running value need not be hashable
    return st.functions(like=lambda acc, item: None, returns=returns)
