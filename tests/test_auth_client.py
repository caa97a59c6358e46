"""Tests for login and registration handling."""

import asyncio

from photo_storefront.adapters.auth_service_client import ServiceResponse
from photo_storefront.client import StorefrontClient
from photo_storefront.domain.session import ANONYMOUS, Authenticated
from photo_storefront.services.auth import (
    CONNECTIVITY_MESSAGE,
    LOGIN_FAILED_MESSAGE,
    REGISTER_FAILED_MESSAGE,
    AuthOutcome,
)
from photo_storefront.services.sessions import TOKEN_KEY, USER_KEY
from tests.conftest import ANA, FakeAuthService, RecordingView, connect_error


def test_login_success_saves_session_and_renders(
    storefront: StorefrontClient, view: RecordingView, store
) -> None:
    asyncio.run(storefront.start())

    result = asyncio.run(storefront.auth_client.login("a@x.com", "secret"))

    assert result.ok
    assert storefront.state == Authenticated(token="abc", user=ANA)
    assert store.get(TOKEN_KEY) == "abc"
    assert store.get(USER_KEY) is not None
    assert view.navs[-1] == ANA
    assert view.alerts == ["Welcome, Ana"]


def test_login_rejected_surfaces_service_message(
    storefront: StorefrontClient, view: RecordingView, store, auth_service
) -> None:
    auth_service.response = ServiceResponse(
        status_code=401, payload={"message": "bad credentials"}
    )
    asyncio.run(storefront.start())

    result = asyncio.run(storefront.auth_client.login("a@x.com", "wrong"))

    assert result.outcome is AuthOutcome.CREDENTIALS
    assert storefront.state == ANONYMOUS
    assert view.alerts == ["bad credentials"]
    assert store.values == {}


def test_login_rejected_without_message_uses_fallback(
    storefront: StorefrontClient, view: RecordingView, auth_service
) -> None:
    auth_service.response = ServiceResponse(status_code=500, payload={})

    result = asyncio.run(storefront.auth_client.login("a@x.com", "secret"))

    assert result.message == LOGIN_FAILED_MESSAGE
    assert view.alerts == [LOGIN_FAILED_MESSAGE]


def test_login_unreachable_service_is_a_connectivity_error(
    storefront: StorefrontClient, view: RecordingView, store, auth_service
) -> None:
    auth_service.response = connect_error()

    result = asyncio.run(storefront.auth_client.login("a@x.com", "secret"))

    assert result.outcome is AuthOutcome.CONNECTIVITY
    assert view.alerts == [CONNECTIVITY_MESSAGE]
    assert storefront.state == ANONYMOUS
    assert store.values == {}


def test_success_without_token_is_not_a_session(
    storefront: StorefrontClient, view: RecordingView, store, auth_service
) -> None:
    auth_service.response = ServiceResponse(
        status_code=200, payload={"user": ANA.to_payload()}
    )

    result = asyncio.run(storefront.auth_client.login("a@x.com", "secret"))

    assert not result.ok
    assert view.alerts == [LOGIN_FAILED_MESSAGE]
    assert store.values == {}


def test_register_success_logs_in(
    storefront: StorefrontClient, view: RecordingView, auth_service: FakeAuthService
) -> None:
    auth_service.response = ServiceResponse(
        status_code=201, payload={"token": "new", "user": ANA.to_payload()}
    )

    result = asyncio.run(
        storefront.auth_client.register("Ana", "a@x.com", "secret")
    )

    assert result.ok
    assert auth_service.calls == [("register", "Ana", "a@x.com", "secret")]
    assert storefront.state == Authenticated(token="new", user=ANA)
    assert view.alerts == ["Account created. Welcome, Ana"]


def test_register_conflict_keeps_anonymous(
    storefront: StorefrontClient, view: RecordingView, auth_service
) -> None:
    auth_service.response = ServiceResponse(status_code=409, payload={"message": ""})

    result = asyncio.run(
        storefront.auth_client.register("Ana", "a@x.com", "secret")
    )

    assert result.outcome is AuthOutcome.CREDENTIALS
    assert view.alerts == [REGISTER_FAILED_MESSAGE]
    assert storefront.state == ANONYMOUS
