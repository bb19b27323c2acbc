"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status

from pvz_store.api.schemas import (
    DummyLoginRequest,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from pvz_store.api.security import get_container
from pvz_store.containers import AppContainer

router = APIRouter(tags=["auth"])


@router.post(
    "/dummyLogin",
    response_model=str,
    responses={400: {"model": ErrorResponse}},
)
def dummy_login(
    body: DummyLoginRequest, container: AppContainer = Depends(get_container)
) -> str:
    """Issue a test token for the requested role."""
    return container.auth_service.dummy_login(body.role)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}},
)
def register(
    body: RegisterRequest, container: AppContainer = Depends(get_container)
) -> UserResponse:
    """Register a user with an email, password and role."""
    user = container.auth_service.register(body.email, body.password, body.role)
    return UserResponse.from_domain(user)


@router.post(
    "/login",
    response_model=str,
    responses={401: {"model": ErrorResponse}},
)
def login(body: LoginRequest, container: AppContainer = Depends(get_container)) -> str:
    """Exchange credentials for a token."""
    return container.auth_service.login(body.email, body.password)
