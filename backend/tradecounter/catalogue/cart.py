"""Client-held trade enquiry cart.

Line items are unique on (product id, variant id); adding an existing pair
merges quantities. Removal and quantity updates address items by position,
and an index outside the list is ignored.
"""

import enum
import math
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel

from tradecounter.catalogue.errors import EmptyCartError, InvalidQuantityError
from tradecounter.schemas.catalogue import ProductResponse, VariantResponse
from tradecounter.schemas.enquiry import CustomerDetails, EnquiryCreate, EnquiryItemCreate

LineKey = tuple[int, int]


class CartState(str, enum.Enum):
    EMPTY_CLOSED = "empty_closed"
    EMPTY_OPEN = "empty_open"
    EMPTY_OPEN_POST_SUBMIT = "empty_open_post_submit"
    POPULATED_CLOSED = "populated_closed"
    POPULATED_OPEN = "populated_open"


class LineItem(BaseModel):
    product: ProductResponse
    variant: VariantResponse
    quantity: int

    @property
    def key(self) -> LineKey:
        return (self.product.id, self.variant.id)


def _positive_quantity(quantity: Any) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        raise InvalidQuantityError(quantity)
    if not math.isfinite(quantity) or quantity != int(quantity) or quantity < 1:
        raise InvalidQuantityError(quantity)
    return int(quantity)


def _clamped_quantity(quantity: Any) -> int:
    try:
        number = int(float(quantity))
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(1, number)


class EnquiryCart:
    def __init__(self):
        self._items: list[LineItem] = []
        self._by_key: dict[LineKey, LineItem] = {}
        self.is_open = False
        self.submitted = False

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self._items)

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def state(self) -> CartState:
        if self._items:
            return CartState.POPULATED_OPEN if self.is_open else CartState.POPULATED_CLOSED
        if not self.is_open:
            return CartState.EMPTY_CLOSED
        return CartState.EMPTY_OPEN_POST_SUBMIT if self.submitted else CartState.EMPTY_OPEN

    def add_item(self, product: ProductResponse, variant: VariantResponse, quantity: Any = 1) -> LineItem:
        """Append a line, or add to the quantity of the existing (product, variant) line.

        Raises InvalidQuantityError, without touching the cart, unless
        ``quantity`` is a positive whole number.
        """
        amount = _positive_quantity(quantity)
        key = (product.id, variant.id)
        self.submitted = False

        existing = self._by_key.get(key)
        if existing is not None:
            existing.quantity += amount
            return existing

        item = LineItem(product=product, variant=variant, quantity=amount)
        self._items.append(item)
        self._by_key[key] = item
        return item

    def add_item_and_open(self, product: ProductResponse, variant: VariantResponse, quantity: Any = 1) -> LineItem:
        item = self.add_item(product, variant, quantity)
        self.is_open = True
        return item

    def _at(self, index: int) -> LineItem | None:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def update_quantity(self, index: int, quantity: Any) -> LineItem | None:
        """Set the quantity at ``index``; anything below 1 (or not a number) becomes 1."""
        item = self._at(index)
        if item is not None:
            item.quantity = _clamped_quantity(quantity)
        return item

    def remove_item(self, index: int) -> LineItem | None:
        item = self._at(index)
        if item is None:
            return None
        del self._items[index]
        del self._by_key[item.key]
        return item

    def clear(self) -> None:
        self._items.clear()
        self._by_key.clear()

    def set_open(self, is_open: bool) -> None:
        self.is_open = is_open
        if not is_open:
            self.submitted = False

    def toggle(self) -> bool:
        self.set_open(not self.is_open)
        return self.is_open

    def mark_submitted(self) -> None:
        """Empty the cart after a confirmed submission, keeping the panel open on the confirmation."""
        self.clear()
        self.submitted = True
        self.is_open = True

    def build_submission_payload(
        self,
        customer: CustomerDetails | Mapping[str, Any],
        note: str | None = None,
    ) -> EnquiryCreate:
        """Snapshot of identities and quantities only; names and labels stay client side."""
        if not self._items:
            raise EmptyCartError()
        return EnquiryCreate(
            customer=CustomerDetails.model_validate(customer),
            message=note,
            items=tuple(
                EnquiryItemCreate(
                    product_id=item.product.id,
                    variant_id=item.variant.id,
                    quantity=item.quantity,
                )
                for item in self._items
            ),
        )
