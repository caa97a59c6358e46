"""Supabase-backed customer repository."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from photo_storefront.domain.customers import CustomerRecord
from photo_storefront.services.accounts import CustomerRepository


@dataclass
class SupabaseCustomerRepository(CustomerRepository):
    """Supabase implementation for customer persistence."""

    client: Client

    def get_by_email(self, email: str) -> CustomerRecord | None:
        """Return the customer for an email, if present."""
        response = (
            self.client.table("customers")
            .select("id, name, email, password_hash, created_at")
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _to_record(response.data[0])
        return None

    def create_customer(
        self, name: str, email: str, password_hash: str
    ) -> CustomerRecord:
        """Create a new customer row and return it."""
        response = (
            self.client.table("customers")
            .insert({"name": name, "email": email, "password_hash": password_hash})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create customer in Supabase")
        return _to_record(response.data[0])


def _to_record(row: dict[str, object]) -> CustomerRecord:
    created_at = row.get("created_at")
    return CustomerRecord(
        id=int(row["id"]),
        name=str(row["name"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        created_at=(
            datetime.fromisoformat(created_at) if isinstance(created_at, str) else None
        ),
    )
