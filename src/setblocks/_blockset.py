from __future__ import annotations

from collections.abc import Callable
from typing import Any

from setblocks import _ops
from setblocks._util import Acc


class BlockSet(frozenset):
    """An immutable set carrying the block operations as methods.

    Set-valued results (``select``, ``reject``, ``map``) are ``BlockSet``s, so
    calls chain::

        BlockSet(range(10)).select(lambda x: x % 2).map(str)

    The plain frozenset operators (``|``, ``&``, ...) still return frozensets.
    """

    __slots__ = ()

    def each(self, block: Callable[[Any], Any]) -> None:
        _ops.each(self, block)

    def match(self, block: Callable[[Any], bool], *, default: Any = None) -> Any:
        return _ops.match(self, block, default=default)

    def select(self, block: Callable[[Any], bool]) -> BlockSet:
        return _ops.select(self, block)  # type: ignore[return-value]

    def reject(self, block: Callable[[Any], bool]) -> BlockSet:
        return _ops.reject(self, block)  # type: ignore[return-value]

    def map(self, block: Callable[[Any], Any]) -> BlockSet:
        return _ops.map(self, block)  # type: ignore[return-value]

    def reduce(self, initial: Acc, block: Callable[[Acc, Any], Acc]) -> Acc:
        return _ops.reduce(self, initial, block)

    def any_match(self, block: Callable[[Any], bool]) -> bool:
        return _ops.any_match(self, block)

    def all_match(self, block: Callable[[Any], bool]) -> bool:
        return _ops.all_match(self, block)

    def none_match(self, block: Callable[[Any], bool]) -> bool:
        return _ops.none_match(self, block)
