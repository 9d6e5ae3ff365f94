"""FastAPI dependencies resolving the caller of a request.

Dependencies run before the request body is validated, so authentication
and role checks always come first.
"""

from fastapi import Depends, Header

from storefront.identity.principal import Principal, require_admin, require_authenticated
from storefront.identity.tokens import principal_from_header


def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    return principal_from_header(authorization)


def authenticated_principal(principal: Principal = Depends(current_principal)) -> Principal:
    require_authenticated(principal)
    return principal


def authenticated_user_id(principal: Principal = Depends(authenticated_principal)) -> str:
    return principal.user_id


def admin_principal(message: str):
    """Build a dependency that only lets admins through, failing with ``message``."""

    def dependency(principal: Principal = Depends(current_principal)) -> Principal:
        require_admin(principal, message)
        return principal

    return dependency
