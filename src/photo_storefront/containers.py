"""Dependency container wiring for the storefront API."""

from dataclasses import dataclass

from supabase import create_client

from photo_storefront.adapters.supabase_customer_repository import (
    SupabaseCustomerRepository,
)
from photo_storefront.adapters.supabase_image_repository import SupabaseImageRepository
from photo_storefront.config import ServerSettings
from photo_storefront.services.accounts import AccountService, TokenIssuer
from photo_storefront.services.images import ImageService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: ServerSettings
    account_service: AccountService
    image_service: ImageService


def build_container(settings: ServerSettings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or ServerSettings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    account_service = AccountService(
        repository=SupabaseCustomerRepository(supabase_client),
        token_issuer=TokenIssuer(
            secret=resolved_settings.token_secret,
            ttl_seconds=resolved_settings.token_ttl_seconds,
        ),
    )
    image_service = ImageService(SupabaseImageRepository(supabase_client))
    return AppContainer(
        settings=resolved_settings,
        account_service=account_service,
        image_service=image_service,
    )
