"""Domain models for the photo catalog."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from photo_storefront.domain.cart import CartItem


@dataclass(frozen=True)
class Image:
    """Represents a photo offered for sale."""

    id: int
    title: str
    description: str | None
    price: Decimal
    stock: int
    category: str
    category_id: int | None
    image_url: str
    active: bool
    created_at: datetime | None

    def as_cart_item(self) -> CartItem:
        """Return the cart view of this image."""
        return CartItem(item_id=self.id, name=self.title, unit_price=self.price)
