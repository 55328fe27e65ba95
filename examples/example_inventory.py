"""Warehouse inventory: block operations over a set of stock items."""

from __future__ import annotations

import dataclasses

from setblocks import BlockSet, map, match, reduce, reject, select


@dataclasses.dataclass(frozen=True)
class Item:
    sku: str
    category: str
    quantity: int


STOCK = frozenset(
    {
        Item("A-100", "tools", 4),
        Item("A-101", "tools", 0),
        Item("B-200", "paint", 12),
        Item("B-201", "paint", 0),
        Item("C-300", "garden", 7),
    }
)


def out_of_stock(items: frozenset[Item]) -> frozenset[Item]:
    return select(items, lambda item: item.quantity == 0)  # type: ignore[return-value]


def available(items: frozenset[Item]) -> frozenset[Item]:
    return reject(items, lambda item: item.quantity == 0)  # type: ignore[return-value]


def categories(items: frozenset[Item]) -> frozenset[str]:
    # several items share a category; the result set keeps one of each
    return map(items, lambda item: item.category)  # type: ignore[return-value]


def total_units(items: frozenset[Item]) -> int:
    return reduce(items, 0, lambda total, item: total + item.quantity)


def find_sku(items: frozenset[Item], sku: str) -> Item | None:
    return match(items, lambda item: item.sku == sku)


def restock_skus(items: frozenset[Item]) -> BlockSet:
    return BlockSet(items).select(lambda item: item.quantity < 5).map(lambda item: item.sku)
