"""Domain models for storefront customers."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CustomerRecord:
    """Represents a customer stored in the database."""

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class AuthSession:
    """A freshly issued token for a customer."""

    token: str
    customer: CustomerRecord
