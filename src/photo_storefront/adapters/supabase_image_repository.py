"""Supabase-backed image repository."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from supabase import Client

from photo_storefront.domain.catalog import Image
from photo_storefront.services.images import ImageRepository

_IMAGE_COLUMNS = (
    "id, title, description, price, stock, category, category_id, "
    "image_url, active, created_at"
)


@dataclass
class SupabaseImageRepository(ImageRepository):
    """Supabase implementation for catalog images."""

    client: Client

    def list_active_images(self) -> list[Image]:
        """Return active images ordered by title."""
        response = (
            self.client.table("images")
            .select(_IMAGE_COLUMNS)
            .eq("active", True)
            .order("title")
            .execute()
        )
        return [_to_image(row) for row in response.data or []]


def _to_image(row: dict[str, object]) -> Image:
    created_at = row.get("created_at")
    category_id = row.get("category_id")
    return Image(
        id=int(row["id"]),
        title=str(row["title"]),
        description=row.get("description"),
        price=Decimal(str(row["price"])),
        stock=int(row.get("stock") or 0),
        category=str(row.get("category") or "General"),
        category_id=int(category_id) if category_id is not None else None,
        image_url=str(row["image_url"]),
        active=bool(row.get("active", True)),
        created_at=(
            datetime.fromisoformat(created_at) if isinstance(created_at, str) else None
        ),
    )
