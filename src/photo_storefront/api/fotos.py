"""Public catalog endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from photo_storefront.api.models import ImageListResponse, ImageOut

if TYPE_CHECKING:
    from photo_storefront.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/fotos", tags=["catalog"])


@router.get("")
async def list_images(request: Request) -> JSONResponse:
    """Return every active image."""
    container: AppContainer = request.app.state.container
    try:
        images = container.image_service.list_active()
    except Exception:
        logger.exception("Failed to list images")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal server error"},
        )
    body = ImageListResponse(
        success=True,
        message=f"Found {len(images)} images",
        data=[ImageOut.from_image(image) for image in images],
    )
    return JSONResponse(content=body.model_dump(mode="json", by_alias=True))
