from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from collections.abc import Set as AbstractSet
from typing import Any

from setblocks._config import contracts_enabled
from setblocks._errors import InvalidArgument
from setblocks._util import _qualified_name, _safe_call

_ORIGINAL_ATTR = "__setblocks_original__"


def _root_original(fn: Callable[..., Any]) -> Callable[..., Any]:
    cur = fn
    while True:
        nxt = getattr(cur, _ORIGINAL_ATTR, None)
        if nxt is None:
            return cur
        cur = nxt


def _set_original(wrapper: Callable[..., Any], original: Callable[..., Any]) -> None:
    setattr(wrapper, _ORIGINAL_ATTR, original)


def _bind(sig: inspect.Signature, args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
    bound = sig.bind(*args, **kwargs)
    bound.apply_defaults()
    return dict(bound.arguments)


def requires(
    param: str,
    check: Callable[[Any], bool],
    reason: str,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Reject a call with :class:`InvalidArgument` unless ``check(param)`` holds.

    The check runs before the wrapped operation touches any element.
    """

    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        root = _root_original(fn)
        sig = inspect.signature(root)
        if param not in sig.parameters:
            raise ValueError(f"{_qualified_name(root)} has no parameter {param!r}")

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            value = _bind(sig, args, kwargs)[param]
            if not check(value):
                raise InvalidArgument(root.__name__, param, f"{reason}, got {type(value).__name__}")
            return fn(*args, **kwargs)

        _set_original(wrapper, fn)
        return wrapper

    return deco


def requires_block(param: str = "block") -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    return requires(param, callable, "must be callable")


def requires_set(param: str = "source") -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    return requires(param, lambda value: isinstance(value, AbstractSet), "must be a set")


def ensures(pred: Callable[..., bool]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Attach a postcondition ``pred(**arguments, result=...)``.

    Only evaluated while contract checking is enabled (see ``setblocks._config``).
    """

    def deco(fn: Callable[..., Any]) -> Callable[..., Any]:
        root = _root_original(fn)
        sig = inspect.signature(root)

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = fn(*args, **kwargs)
            if contracts_enabled():
                ok, err = _safe_call(pred, **_bind(sig, args, kwargs), result=result)
                if not ok:
                    raise AssertionError(
                        f"Postcondition failed for {_qualified_name(root)}: {err or 'returned False'}"
                    )
            return result

        _set_original(wrapper, fn)
        return wrapper

    return deco
