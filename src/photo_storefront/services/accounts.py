"""Customer registration and login."""

import base64
import hashlib
import hmac
import json
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Protocol

from photo_storefront.domain.customers import AuthSession, CustomerRecord

logger = logging.getLogger(__name__)

_HASH_ALGORITHM = "pbkdf2_sha256"
_HASH_ITERATIONS = 390_000


class AccountError(Exception):
    """Base class for account errors that map to an HTTP status."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidAccountDataError(AccountError):
    """Raised when registration or login input is incomplete."""


class EmailAlreadyRegisteredError(AccountError):
    """Raised when registering an email that already has an account."""

    status_code = 409


class InvalidCredentialsError(AccountError):
    """Raised when the email or password does not match."""

    status_code = 401


class CustomerRepository(Protocol):
    """Persistence interface for customers."""

    def get_by_email(self, email: str) -> CustomerRecord | None:
        """Return the customer with this email, if present."""

    def create_customer(
        self, name: str, email: str, password_hash: str
    ) -> CustomerRecord:
        """Create and return a new customer."""


def hash_password(password: str, salt: str | None = None) -> str:
    """Hash a password as ``algorithm$iterations$salt$digest``."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), _HASH_ITERATIONS
    )
    return f"{_HASH_ALGORITHM}${_HASH_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash."""
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != _HASH_ALGORITHM:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), rounds)
    return hmac.compare_digest(digest.hex(), expected)


@dataclass(frozen=True)
class TokenIssuer:
    """Issues and verifies HMAC-signed customer tokens."""

    secret: str
    ttl_seconds: int = 60 * 60 * 24

    def issue(self, customer_id: int, now: float | None = None) -> str:
        """Return a signed token for a customer."""
        issued_at = int(now if now is not None else time.time())
        payload = json.dumps(
            {"sub": customer_id, "exp": issued_at + self.ttl_seconds},
            separators=(",", ":"),
        ).encode()
        body = base64.urlsafe_b64encode(payload).decode().rstrip("=")
        return f"{body}.{self._sign(body)}"

    def verify(self, token: str, now: float | None = None) -> int | None:
        """Return the customer id for a valid, unexpired token.

        The storefront routes only issue tokens. This is the check for services
        that accept them as bearer credentials, such as the orders backend.
        """
        body, _, signature = token.partition(".")
        if not body or not hmac.compare_digest(self._sign(body), signature):
            return None
        padded = body + "=" * (-len(body) % 4)
        try:
            claims = json.loads(base64.urlsafe_b64decode(padded))
        except ValueError:
            return None
        current = now if now is not None else time.time()
        if not isinstance(claims, dict) or claims.get("exp", 0) < current:
            return None
        subject = claims.get("sub")
        return subject if isinstance(subject, int) else None

    def _sign(self, body: str) -> str:
        return hmac.new(self.secret.encode(), body.encode(), hashlib.sha256).hexdigest()


@dataclass
class AccountService:
    """Application service for customer accounts."""

    repository: CustomerRepository
    token_issuer: TokenIssuer

    def register(self, name: str, email: str, password: str) -> AuthSession:
        """Create an account and return a session for it."""
        name = name.strip()
        email = _normalize_email(email)
        if not name or not email or not password:
            raise InvalidAccountDataError("Name, email and password are required")
        if "@" not in email:
            raise InvalidAccountDataError("Email address is not valid")
        if self.repository.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError("Email is already registered")

        customer = self.repository.create_customer(
            name=name, email=email, password_hash=hash_password(password)
        )
        logger.info("Registered customer %s", customer.id)
        token = self.token_issuer.issue(customer.id)
        return AuthSession(token=token, customer=customer)

    def login(self, email: str, password: str) -> AuthSession:
        """Verify credentials and return a session."""
        email = _normalize_email(email)
        if not email or not password:
            raise InvalidAccountDataError("Email and password are required")
        customer = self.repository.get_by_email(email)
        if customer is None or not verify_password(password, customer.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError("Invalid email or password")
        token = self.token_issuer.issue(customer.id)
        return AuthSession(token=token, customer=customer)


def _normalize_email(email: str) -> str:
    return email.strip().lower()
