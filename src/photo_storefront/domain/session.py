"""Domain models for the client session."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    """Represents the authenticated customer as returned by the auth service."""

    id: int
    name: str
    email: str

    def to_payload(self) -> dict[str, object]:
        """Return the JSON-compatible representation of the profile."""
        return {"id": self.id, "name": self.name, "email": self.email}

    @classmethod
    def from_payload(cls, payload: object) -> "UserProfile":
        """Build a profile from a decoded JSON payload.

        Raises ``ValueError`` when the payload is not a complete profile.
        """
        if not isinstance(payload, dict):
            raise ValueError("User payload must be an object")
        user_id = payload.get("id")
        name = payload.get("name")
        email = payload.get("email")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise ValueError("User payload is missing a numeric id")
        if not isinstance(name, str) or not name:
            raise ValueError("User payload is missing a name")
        if not isinstance(email, str) or not email:
            raise ValueError("User payload is missing an email")
        return cls(id=user_id, name=name, email=email)


@dataclass(frozen=True)
class Anonymous:
    """No customer is logged in."""


@dataclass(frozen=True)
class Authenticated:
    """A customer is logged in with a service-issued token."""

    token: str
    user: UserProfile


SessionState = Anonymous | Authenticated

ANONYMOUS = Anonymous()
