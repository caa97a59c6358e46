"""Client-side shopping cart with persistence mirroring."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation

from photo_storefront.adapters.local_storage import KeyValueStore
from photo_storefront.domain.cart import EMPTY_CART, Cart, CartItem, CartLine

logger = logging.getLogger(__name__)

CART_KEY = "cart"

CartListener = Callable[[Cart], None]


class CorruptCartError(ValueError):
    """Raised when the persisted cart payload cannot be decoded."""


@dataclass
class CartManager:
    """Owns the in-memory cart and mirrors it to the local store."""

    store: KeyValueStore
    cart: Cart = EMPTY_CART
    listeners: list[CartListener] = field(default_factory=list)

    def subscribe(self, listener: CartListener) -> None:
        """Register a callback invoked after every cart mutation."""
        self.listeners.append(listener)

    def add_item(self, item: CartItem, quantity: int = 1) -> Cart:
        """Add an item, merging with an existing line for the same item."""
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        lines = list(self.cart.lines)
        for index, line in enumerate(lines):
            if line.item_id == item.item_id:
                lines[index] = replace(line, quantity=line.quantity + quantity)
                break
        else:
            lines.append(
                CartLine(
                    item_id=item.item_id,
                    name=item.name,
                    unit_price=item.unit_price,
                    quantity=quantity,
                )
            )
        return self._commit(Cart(lines=tuple(lines)))

    def remove_item(self, item_id: int) -> Cart:
        """Remove the line for an item; missing items are ignored."""
        lines = tuple(line for line in self.cart.lines if line.item_id != item_id)
        return self._commit(Cart(lines=lines))

    def clear(self) -> Cart:
        """Empty the cart and drop its persisted snapshot."""
        self.cart = EMPTY_CART
        if not self.store.remove(CART_KEY):
            logger.warning("Cart cleared in memory but persisted copy remains")
        self._notify()
        return self.cart

    def reset(self) -> None:
        """Empty the in-memory cart without touching the store."""
        self.cart = EMPTY_CART
        self._notify()

    def restore(self) -> Cart:
        """Load the persisted cart snapshot, if any."""
        raw = self.store.get(CART_KEY)
        self.cart = EMPTY_CART if raw is None else decode_cart(raw)
        self._notify()
        return self.cart

    def _commit(self, cart: Cart) -> Cart:
        self.cart = cart
        if not self.store.set(CART_KEY, encode_cart(cart)):
            logger.warning("Cart changed in memory but could not be persisted")
        self._notify()
        return cart

    def _notify(self) -> None:
        for listener in self.listeners:
            listener(self.cart)


def encode_cart(cart: Cart) -> str:
    """Serialize cart lines for the local store."""
    return json.dumps(
        [
            {
                "itemId": line.item_id,
                "name": line.name,
                "unitPrice": str(line.unit_price),
                "quantity": line.quantity,
            }
            for line in cart.lines
        ]
    )


def decode_cart(raw: str) -> Cart:
    """Deserialize a persisted cart, rejecting anything malformed."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CorruptCartError("Cart payload is not valid JSON") from exc
    if not isinstance(data, list):
        raise CorruptCartError("Cart payload must be a list")

    lines: list[CartLine] = []
    seen: set[int] = set()
    for entry in data:
        line = _decode_line(entry)
        if line.item_id in seen:
            raise CorruptCartError(f"Duplicate cart line for item {line.item_id}")
        seen.add(line.item_id)
        lines.append(line)
    return Cart(lines=tuple(lines))


def _decode_line(entry: object) -> CartLine:
    if not isinstance(entry, dict):
        raise CorruptCartError("Cart line must be an object")
    item_id = entry.get("itemId")
    name = entry.get("name")
    quantity = entry.get("quantity")
    if isinstance(item_id, bool) or not isinstance(item_id, int):
        raise CorruptCartError("Cart line has no item id")
    if not isinstance(name, str):
        raise CorruptCartError("Cart line has no name")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise CorruptCartError("Cart line has an invalid quantity")
    try:
        unit_price = Decimal(str(entry.get("unitPrice")))
    except InvalidOperation as exc:
        raise CorruptCartError("Cart line has an invalid price") from exc
    if not unit_price.is_finite() or unit_price < 0:
        raise CorruptCartError("Cart line has an invalid price")
    return CartLine(
        item_id=item_id, name=name, unit_price=unit_price, quantity=quantity
    )
