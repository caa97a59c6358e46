"""Client-side view of the photo catalog."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation

import httpx

from photo_storefront.adapters.catalog_client import CatalogClient
from photo_storefront.domain.catalog import Image

logger = logging.getLogger(__name__)


class CatalogUnavailableError(RuntimeError):
    """Raised when the catalog listing cannot be fetched or understood."""


@dataclass
class CatalogService:
    """Fetches the active image listing and keeps the latest copy."""

    client: CatalogClient
    images: list[Image] = field(default_factory=list)

    async def refresh(self) -> list[Image]:
        """Fetch the listing, keeping only active images."""
        try:
            payload = await self.client.list_images()
        except httpx.HTTPError as exc:
            logger.exception("Failed to fetch the catalog")
            raise CatalogUnavailableError("Could not load the catalog") from exc
        except ValueError as exc:
            logger.exception("Catalog response was not JSON")
            raise CatalogUnavailableError("Could not load the catalog") from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise CatalogUnavailableError("Catalog response has no image list")
        try:
            images = [image_from_payload(entry) for entry in data]
        except (KeyError, TypeError, ValueError, InvalidOperation) as exc:
            logger.exception("Catalog response contained a malformed image")
            raise CatalogUnavailableError("Catalog response is malformed") from exc

        self.images = [image for image in images if image.active]
        logger.info("Loaded %s catalog images", len(self.images))
        return self.images

    def find(self, item_id: int) -> Image | None:
        """Return a cached image by id."""
        for image in self.images:
            if image.id == item_id:
                return image
        return None


def image_from_payload(payload: dict[str, object]) -> Image:
    """Build an image from the catalog service's JSON shape."""
    created_at = payload.get("createdAt")
    category_id = payload.get("categoryId")
    return Image(
        id=int(payload["id"]),
        title=str(payload["title"]),
        description=_optional_str(payload.get("description")),
        price=Decimal(str(payload["price"])),
        stock=int(payload.get("stock") or 0),
        category=str(payload.get("category") or "General"),
        category_id=int(category_id) if category_id is not None else None,
        image_url=str(payload["imageUrl"]),
        active=bool(payload.get("active", True)),
        created_at=(
            datetime.fromisoformat(created_at) if isinstance(created_at, str) else None
        ),
    )


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
