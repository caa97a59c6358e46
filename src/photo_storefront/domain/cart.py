"""Domain models for the shopping cart."""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class CartItem:
    """A purchasable catalog entry as seen by the cart."""

    item_id: int
    name: str
    unit_price: Decimal


@dataclass(frozen=True)
class CartLine:
    """One cart line; quantity is always at least one."""

    item_id: int
    name: str
    unit_price: Decimal
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Cart:
    """Ordered cart lines with a total derived from them."""

    lines: tuple[CartLine, ...] = field(default_factory=tuple)

    @property
    def total(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0"))

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find(self, item_id: int) -> CartLine | None:
        for line in self.lines:
            if line.item_id == item_id:
                return line
        return None


EMPTY_CART = Cart()
