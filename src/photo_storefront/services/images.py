"""Catalog listing for the storefront API."""

from dataclasses import dataclass
from typing import Protocol

from photo_storefront.domain.catalog import Image


class ImageRepository(Protocol):
    """Persistence interface for catalog images."""

    def list_active_images(self) -> list[Image]:
        """Return active images ordered by title."""


@dataclass
class ImageService:
    """Application service for the public catalog."""

    repository: ImageRepository

    def list_active(self) -> list[Image]:
        """Return images currently offered for sale."""
        return [image for image in self.repository.list_active_images() if image.active]
