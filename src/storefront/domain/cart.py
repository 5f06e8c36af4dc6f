"""Shopping cart aggregate.

The cart owns its line items and is only changed through the methods
below. An entry with quantity below 1 never exists: every operation that
would produce one removes the entry instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from decimal import Decimal

from .models import LineItem

logger = logging.getLogger(__name__)


def _key(item_or_id) -> int | str:
    return item_or_id.id if isinstance(item_or_id, LineItem) else item_or_id


class Cart:
    """Ordered set of line items keyed by product id.

    Insertion order is kept for display. Totals are recomputed on every
    read.
    """

    def __init__(self, items: Iterable[LineItem] = ()):
        self._items: dict[int | str, LineItem] = {}
        for item in items:
            self.add_item(item)

    # ------------------------------------------------------------------ #
    #  Mutations                                                           #
    # ------------------------------------------------------------------ #

    def add_item(self, item: LineItem) -> None:
        """Insert ``item`` or overwrite the stored quantity for its id.

        Callers pass the new total quantity, so adding the same product
        twice keeps the last quantity rather than summing.

        Raises:
            ValueError: If ``item.quantity`` is below 1.
        """
        if item.quantity < 1:
            raise ValueError(
                f"quantity must be >= 1, got {item.quantity} for product {item.id!r}"
            )
        self._items[item.id] = item
        logger.debug("Cart set %r to quantity %d", item.id, item.quantity)

    def increase_quantity(self, item: LineItem) -> None:
        """Add one to the stored quantity (or insert with quantity 1).

        Shorthand for ``add_item`` with ``quantity + 1``.
        """
        current = self._items.get(item.id)
        quantity = current.quantity + 1 if current else 1
        self.add_item(item.with_quantity(quantity))

    def decrease_quantity(self, item: LineItem | int | str) -> None:
        """Subtract one from the stored quantity.

        A product at quantity 1 is removed rather than kept at 0. Unknown
        ids are ignored.
        """
        key = _key(item)
        current = self._items.get(key)
        if current is None:
            return
        if current.quantity <= 1:
            self.remove_item(key)
            return
        self._items[key] = current.with_quantity(current.quantity - 1)

    def remove_item(self, item: LineItem | int | str) -> None:
        """Drop the entry for ``item``; a no-op if it is not in the cart."""
        if self._items.pop(_key(item), None) is not None:
            logger.debug("Cart removed %r", _key(item))

    def clear(self) -> None:
        self._items.clear()

    # ------------------------------------------------------------------ #
    #  Reads                                                               #
    # ------------------------------------------------------------------ #

    @property
    def items(self) -> tuple[LineItem, ...]:
        """Immutable snapshot of the current entries in insertion order."""
        return tuple(self._items.values())

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get(self, product_id: int | str) -> LineItem | None:
        return self._items.get(product_id)

    def total_price(self) -> Decimal:
        return sum((it.subtotal for it in self._items.values()), Decimal("0"))

    def total_quantity(self) -> int:
        return sum(it.quantity for it in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self.items)

    def __contains__(self, item: object) -> bool:
        return _key(item) in self._items

    def __repr__(self) -> str:
        return f"Cart(items={len(self)}, total={self.total_price()})"

    # ------------------------------------------------------------------ #
    #  Serialisation                                                       #
    # ------------------------------------------------------------------ #

    @classmethod
    def from_dicts(cls, rows: Iterable[dict]) -> Cart:
        return cls(LineItem.from_dict(row) for row in rows)

    def to_dicts(self) -> list[dict]:
        return [it.to_dict() for it in self._items.values()]
