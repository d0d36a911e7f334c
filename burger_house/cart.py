"""Session-owned shopping cart"""

from typing import List, Optional, Tuple

from burger_house.models import LineItem
from burger_house.pricing import Number, Totals, compute_totals, to_decimal


class Cart:
    """
    Mutable list of line items built up before checkout.

    Adding a product that is already in the cart with the same note bumps
    its quantity instead of creating a second line. Lines keep the order in
    which they were first added.
    """

    def __init__(self, items: Optional[List[LineItem]] = None):
        self._items: List[LineItem] = list(items or [])

    def _index(self, product_id: str, note: Optional[str]) -> int:
        for index, item in enumerate(self._items):
            if item.product_id == product_id and item.note == note:
                return index
        return -1

    def add(
        self,
        product_id: str,
        unit_price: Number,
        quantity: int = 1,
        note: Optional[str] = None,
        name: Optional[str] = None,
    ) -> LineItem:
        if quantity <= 0:
            raise ValueError("quantity must be positive")

        index = self._index(product_id, note)
        if index >= 0:
            existing = self._items[index]
            line = existing.model_copy(update={"quantity": existing.quantity + quantity})
            self._items[index] = line
        else:
            line = LineItem(
                product_id=product_id,
                name=name,
                unit_price=to_decimal(unit_price),
                quantity=quantity,
                note=note,
            )
            self._items.append(line)
        return line

    def remove(self, product_id: str, note: Optional[str] = None) -> bool:
        index = self._index(product_id, note)
        if index < 0:
            return False
        del self._items[index]
        return True

    def update_quantity(self, product_id: str, quantity: int, note: Optional[str] = None) -> bool:
        """Set a line's quantity; zero or less removes the line"""
        index = self._index(product_id, note)
        if index < 0:
            return False
        if quantity <= 0:
            del self._items[index]
        else:
            self._items[index] = self._items[index].model_copy(update={"quantity": quantity})
        return True

    def clear(self) -> None:
        self._items = []

    @property
    def items(self) -> Tuple[LineItem, ...]:
        return tuple(self._items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def totals(self, tax_rate: Number) -> Totals:
        return compute_totals(self._items, tax_rate)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
