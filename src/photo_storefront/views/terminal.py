"""Plain-text storefront view for terminals."""

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from photo_storefront.domain.cart import Cart
from photo_storefront.domain.catalog import Image
from photo_storefront.domain.session import UserProfile
from photo_storefront.views.controller import ANONYMOUS_NAV_PROMPT, Region


@dataclass
class TerminalView:
    """Writes the storefront to a text stream."""

    stream: TextIO = field(default_factory=lambda: sys.stdout)
    visible: set[Region] = field(default_factory=set)
    _nav: str | None = None

    def set_region_visible(self, region: Region, visible: bool) -> None:
        if visible:
            self.visible.add(region)
        else:
            self.visible.discard(region)

    def render_nav(self, user: UserProfile | None) -> None:
        nav = f"[{user.name}] (logout)" if user else ANONYMOUS_NAV_PROMPT
        if nav != self._nav:
            self._nav = nav
            self._write(nav)

    def render_catalog(self, images: Sequence[Image], purchasable: bool) -> None:
        region = Region.SHOP if purchasable else Region.PREVIEW
        if region not in self.visible:
            return
        if not images:
            self._write("No photos available.")
            return
        for image in images:
            line = f"#{image.id} {image.title} [{image.category}] {image.price:.2f}"
            if purchasable:
                line += f" ({image.stock} in stock)"
            self._write(line)

    def render_cart(self, cart: Cart) -> None:
        if Region.SHOP not in self.visible:
            return
        if cart.is_empty:
            self._write("Cart is empty.")
            return
        for line in cart.lines:
            self._write(
                f"#{line.item_id} {line.name} x{line.quantity} = {line.subtotal:.2f}"
            )
        self._write(f"Total: {cart.total:.2f}")

    def alert(self, text: str) -> None:
        self._write(f"! {text}")

    def _write(self, text: str) -> None:
        print(text, file=self.stream)
