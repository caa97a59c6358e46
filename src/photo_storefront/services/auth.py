"""Login and registration against the authentication service."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

import httpx

from photo_storefront.adapters.auth_service_client import (
    AuthServiceClient,
    ServiceResponse,
)
from photo_storefront.domain.session import SessionState, UserProfile
from photo_storefront.services.sessions import SessionManager

logger = logging.getLogger(__name__)

CONNECTIVITY_MESSAGE = "Could not connect to the server"
LOGIN_FAILED_MESSAGE = "Login failed"
REGISTER_FAILED_MESSAGE = "Registration failed"


async def _nothing_to_prepare() -> None:
    return None


class Alerts(Protocol):
    """Narrow interface for user-facing messages."""

    def alert(self, text: str) -> None:
        """Show a message to the user."""


class AuthOutcome(StrEnum):
    """How an authentication attempt ended."""

    AUTHENTICATED = "authenticated"
    CREDENTIALS = "credentials"
    CONNECTIVITY = "connectivity"


@dataclass(frozen=True)
class AuthResult:
    """Result of a login or registration attempt."""

    outcome: AuthOutcome
    message: str

    @property
    def ok(self) -> bool:
        return self.outcome is AuthOutcome.AUTHENTICATED


@dataclass
class AuthClient:
    """Drives session changes from authentication service responses.

    Login and registration share one contract: a successful response carries
    a usable session, which is saved exactly the same way for both.
    ``prepare_session`` is awaited after a response is accepted and before the
    session is saved, so session listeners see fresh data.
    """

    service: AuthServiceClient
    session_manager: SessionManager
    alerts: Alerts
    prepare_session: Callable[[], Awaitable[object]] = _nothing_to_prepare

    async def login(self, email: str, password: str) -> AuthResult:
        """Log in with email and password."""
        try:
            response = await self.service.login(email, password)
        except httpx.TransportError:
            logger.exception("Login request failed", extra={"email": email})
            return self._fail(AuthOutcome.CONNECTIVITY, CONNECTIVITY_MESSAGE)
        logger.info("Login response status %s", response.status_code)
        return await self._handle(
            response,
            fallback=LOGIN_FAILED_MESSAGE,
            welcome="Welcome, {name}",
        )

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create an account; a successful registration also logs in."""
        try:
            response = await self.service.register(name, email, password)
        except httpx.TransportError:
            logger.exception("Registration request failed", extra={"email": email})
            return self._fail(AuthOutcome.CONNECTIVITY, CONNECTIVITY_MESSAGE)
        logger.info("Registration response status %s", response.status_code)
        return await self._handle(
            response,
            fallback=REGISTER_FAILED_MESSAGE,
            welcome="Account created. Welcome, {name}",
        )

    def logout(self) -> SessionState:
        """End the current session."""
        return self.session_manager.clear_session()

    async def _handle(
        self, response: ServiceResponse, fallback: str, welcome: str
    ) -> AuthResult:
        if not response.ok:
            return self._fail(
                AuthOutcome.CREDENTIALS, _service_message(response) or fallback
            )

        token = response.payload.get("token")
        try:
            user = UserProfile.from_payload(response.payload.get("user"))
        except ValueError:
            logger.exception("Auth service returned an unusable user payload")
            return self._fail(AuthOutcome.CREDENTIALS, fallback)
        if not isinstance(token, str) or not token:
            logger.error("Auth service response did not include a token")
            return self._fail(AuthOutcome.CREDENTIALS, fallback)

        await self.prepare_session()
        self.session_manager.save_session(token, user)
        message = welcome.format(name=user.name)
        self.alerts.alert(message)
        return AuthResult(outcome=AuthOutcome.AUTHENTICATED, message=message)

    def _fail(self, outcome: AuthOutcome, message: str) -> AuthResult:
        self.alerts.alert(message)
        return AuthResult(outcome=outcome, message=message)


def _service_message(response: ServiceResponse) -> str | None:
    message = response.payload.get("message")
    return message if isinstance(message, str) and message else None
