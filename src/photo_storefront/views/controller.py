"""Reconcile a storefront view with session and cart state."""

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from photo_storefront.domain.cart import Cart
from photo_storefront.domain.catalog import Image
from photo_storefront.domain.session import Authenticated, SessionState, UserProfile
from photo_storefront.services.cart import CartManager
from photo_storefront.services.catalog import CatalogService, CatalogUnavailableError
from photo_storefront.services.sessions import SessionManager

logger = logging.getLogger(__name__)

ANONYMOUS_NAV_PROMPT = "Log in to shop"


class Region(StrEnum):
    """Areas of the storefront whose visibility follows the session."""

    AUTH = "auth"
    PREVIEW = "preview"
    SHOP = "shop"


class StorefrontView(Protocol):
    """Rendering surface driven by the view controller."""

    def set_region_visible(self, region: Region, visible: bool) -> None:
        """Show or hide a region."""

    def render_nav(self, user: UserProfile | None) -> None:
        """Render the navigation bar; ``None`` means nobody is logged in."""

    def render_catalog(self, images: Sequence[Image], purchasable: bool) -> None:
        """Render the catalog listing."""

    def render_cart(self, cart: Cart) -> None:
        """Render the cart contents and total."""

    def alert(self, text: str) -> None:
        """Show a message to the user."""


@dataclass
class ViewController:
    """Keeps the view in step with the session; owns no business state.

    Entering the authenticated state draws the shop from the catalog cache,
    so callers refresh the catalog before a session is saved or restored.
    """

    view: StorefrontView
    session_manager: SessionManager
    cart_manager: CartManager
    catalog: CatalogService
    _authenticated: bool = False
    _show_shop: bool = True

    def bind(self) -> None:
        """Subscribe to session and cart changes."""
        self.session_manager.subscribe(self.render)
        self.cart_manager.subscribe(self._on_cart_changed)

    def render(self, state: SessionState) -> None:
        """Apply the session state to the view."""
        authenticated = isinstance(state, Authenticated)
        entering = authenticated and not self._authenticated
        self._authenticated = authenticated

        self.view.set_region_visible(Region.AUTH, not authenticated)
        self.view.set_region_visible(Region.PREVIEW, not authenticated)
        self.view.set_region_visible(Region.SHOP, authenticated)
        self.view.render_nav(state.user if isinstance(state, Authenticated) else None)

        if entering and self._show_shop:
            self.render_catalog()
            self.view.render_cart(self.cart_manager.cart)

    @contextmanager
    def shop_hidden(self) -> Iterator[None]:
        """Apply session changes without drawing the shop on entry."""
        self._show_shop = False
        try:
            yield
        finally:
            self._show_shop = True

    async def refresh_catalog(self) -> bool:
        """Reload the catalog cache, alerting the user when it fails."""
        try:
            await self.catalog.refresh()
        except CatalogUnavailableError as exc:
            logger.warning("Keeping %s cached images", len(self.catalog.images))
            self.view.alert(str(exc))
            return False
        return True

    def render_catalog(self) -> None:
        """Render the cached catalog for the current session."""
        self.view.render_catalog(self.catalog.images, purchasable=self._authenticated)

    def alert(self, text: str) -> None:
        """Forward a user-facing message to the view."""
        self.view.alert(text)

    def _on_cart_changed(self, cart: Cart) -> None:
        if self._authenticated:
            self.view.render_cart(cart)
