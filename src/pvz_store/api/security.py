"""Bearer token dependencies for the REST API."""

from collections.abc import Callable

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from pvz_store.containers import AppContainer
from pvz_store.domain.users import AuthPrincipal, UserRole
from pvz_store.errors import ForbiddenRole, Unauthenticated

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def get_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    container: AppContainer = Depends(get_container),
) -> AuthPrincipal:
    """Resolve the caller from the ``Authorization: Bearer`` header."""
    if credentials is None:
        raise Unauthenticated
    return container.auth_service.validate_token(credentials.credentials)


def require_roles(*roles: UserRole) -> Callable[..., AuthPrincipal]:
    """Build a dependency that admits only principals with one of ``roles``."""

    def role_checker(
        principal: AuthPrincipal = Depends(get_principal),
    ) -> AuthPrincipal:
        if principal.role not in roles:
            raise ForbiddenRole
        return principal

    return role_checker


require_moderator = require_roles(UserRole.MODERATOR)
require_employee = require_roles(UserRole.EMPLOYEE)
require_any_role = require_roles(UserRole.EMPLOYEE, UserRole.MODERATOR)
