"""Process-wide storefront client state."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from photo_storefront.adapters.auth_service_client import (
    AuthServiceClient,
    HttpxAuthServiceClient,
)
from photo_storefront.adapters.catalog_client import CatalogClient, HttpxCatalogClient
from photo_storefront.adapters.local_storage import JsonFileStore, KeyValueStore
from photo_storefront.config import ClientSettings
from photo_storefront.domain.session import SessionState
from photo_storefront.services.auth import AuthClient
from photo_storefront.services.cart import CartManager
from photo_storefront.services.catalog import CatalogService
from photo_storefront.services.sessions import SessionManager
from photo_storefront.views.controller import StorefrontView, ViewController


async def _no_resources() -> None:
    return None


@dataclass
class StorefrontClient:
    """Holds the session, cart, auth and view wiring for one process.

    Build it once, await ``start`` to restore the previous session and
    ``close`` when done.
    """

    store: KeyValueStore
    session_manager: SessionManager
    cart_manager: CartManager
    auth_client: AuthClient
    catalog: CatalogService
    view_controller: ViewController
    close_resources: Callable[[], Awaitable[None]] = _no_resources

    @classmethod
    def create(
        cls, settings: ClientSettings, view: StorefrontView
    ) -> "StorefrontClient":
        """Create a client talking to the configured storefront API."""
        auth_service = HttpxAuthServiceClient.create(
            settings.api_url, timeout=settings.request_timeout_seconds
        )
        catalog_client = HttpxCatalogClient.create(
            settings.api_url, timeout=settings.request_timeout_seconds
        )

        async def close_resources() -> None:
            await auth_service.close()
            await catalog_client.close()

        return cls.assemble(
            store=JsonFileStore(settings.storage_path),
            view=view,
            auth_service=auth_service,
            catalog_client=catalog_client,
            close_resources=close_resources,
        )

    @classmethod
    def assemble(  # noqa: PLR0913
        cls,
        *,
        store: KeyValueStore,
        view: StorefrontView,
        auth_service: AuthServiceClient,
        catalog_client: CatalogClient,
        close_resources: Callable[[], Awaitable[None]] = _no_resources,
    ) -> "StorefrontClient":
        """Wire the managers together around the given collaborators."""
        cart_manager = CartManager(store)
        session_manager = SessionManager(store, cart_manager)
        catalog = CatalogService(catalog_client)
        view_controller = ViewController(
            view=view,
            session_manager=session_manager,
            cart_manager=cart_manager,
            catalog=catalog,
        )
        view_controller.bind()
        auth_client = AuthClient(
            service=auth_service,
            session_manager=session_manager,
            alerts=view_controller,
            prepare_session=view_controller.refresh_catalog,
        )
        return cls(
            store=store,
            session_manager=session_manager,
            cart_manager=cart_manager,
            auth_client=auth_client,
            catalog=catalog,
            view_controller=view_controller,
            close_resources=close_resources,
        )

    @property
    def state(self) -> SessionState:
        return self.session_manager.state

    async def start(self, *, show_shop: bool = True) -> SessionState:
        """Restore whatever session the local store holds.

        The catalog is fetched first so a restored session opens on a
        populated shop. With ``show_shop=False`` nothing is fetched and only
        the navigation reflects the restored session.
        """
        if not show_shop:
            with self.view_controller.shop_hidden():
                return self.session_manager.restore_session()
        await self.view_controller.refresh_catalog()
        return self.session_manager.restore_session()

    async def load_catalog(self) -> None:
        """Fetch the catalog and render it for the current session."""
        await self.catalog.refresh()
        self.view_controller.render_catalog()

    async def close(self) -> None:
        """Release network resources."""
        await self.close_resources()
