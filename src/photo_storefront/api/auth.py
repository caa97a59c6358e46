"""Authentication endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from photo_storefront.api.models import AuthResponse, LoginRequest, RegisterRequest
from photo_storefront.services.accounts import AccountError

if TYPE_CHECKING:
    from photo_storefront.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, request: Request) -> JSONResponse:
    """Create a customer account and log it in."""
    container: AppContainer = request.app.state.container
    try:
        session = container.account_service.register(
            name=body.name, email=body.email, password=body.password
        )
    except AccountError as exc:
        return _error(exc)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=AuthResponse.from_session(session).model_dump(),
    )


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> JSONResponse:
    """Exchange credentials for a token."""
    container: AppContainer = request.app.state.container
    try:
        session = container.account_service.login(
            email=body.email, password=body.password
        )
    except AccountError as exc:
        return _error(exc)
    return JSONResponse(content=AuthResponse.from_session(session).model_dump())


def _error(exc: AccountError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
