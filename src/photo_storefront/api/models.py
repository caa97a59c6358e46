"""Pydantic models for storefront API payloads."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from photo_storefront.domain.catalog import Image
from photo_storefront.domain.customers import AuthSession


class LoginRequest(BaseModel):
    """Login request body."""

    email: str
    password: str


class RegisterRequest(BaseModel):
    """Registration request body."""

    name: str
    email: str
    password: str


class UserOut(BaseModel):
    """Public customer fields."""

    id: int
    name: str
    email: str


class AuthResponse(BaseModel):
    """Token and customer returned by login and registration."""

    token: str
    user: UserOut

    @classmethod
    def from_session(cls, session: AuthSession) -> "AuthResponse":
        customer = session.customer
        return cls(
            token=session.token,
            user=UserOut(id=customer.id, name=customer.name, email=customer.email),
        )


class ImageOut(BaseModel):
    """Catalog image as exposed to clients."""

    id: int
    title: str
    description: str | None = None
    price: Decimal
    stock: int
    category: str
    category_id: int | None = Field(default=None, serialization_alias="categoryId")
    image_url: str = Field(serialization_alias="imageUrl")
    active: bool
    created_at: datetime | None = Field(default=None, serialization_alias="createdAt")

    @classmethod
    def from_image(cls, image: Image) -> "ImageOut":
        return cls(
            id=image.id,
            title=image.title,
            description=image.description,
            price=image.price,
            stock=image.stock,
            category=image.category,
            category_id=image.category_id,
            image_url=image.image_url,
            active=image.active,
            created_at=image.created_at,
        )


class ImageListResponse(BaseModel):
    """Envelope for the image listing."""

    success: bool
    message: str
    data: list[ImageOut] = Field(default_factory=list)
