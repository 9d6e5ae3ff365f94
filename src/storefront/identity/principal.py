"""Who is making a request, and what they may do.

A ``Principal`` is resolved once per request by the HTTP layer and handed to
the operations that need it. Authorization is expressed as predicates over
the principal and the owner of the resource being touched.
"""

from dataclasses import dataclass
from enum import Enum

from storefront.shared.errors import NotAuthenticatedError, NotAuthorizedError


class Role(Enum):
    ANONYMOUS = "anonymous"
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Principal:
    role: Role = Role.ANONYMOUS
    user_id: str | None = None
    email: str | None = None

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls()

    @classmethod
    def user(cls, user_id: str, email: str | None = None) -> "Principal":
        return cls(role=Role.USER, user_id=str(user_id), email=email)

    @classmethod
    def admin(cls, user_id: str, email: str | None = None) -> "Principal":
        return cls(role=Role.ADMIN, user_id=str(user_id), email=email)

    @property
    def is_authenticated(self) -> bool:
        return self.role != Role.ANONYMOUS and self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == Role.ADMIN

    def owns(self, owner_id) -> bool:
        return self.is_authenticated and owner_id is not None and str(owner_id) == self.user_id

    def can_view(self, owner_id) -> bool:
        """Owners see their own records, admins see everyone's."""
        return self.is_admin or self.owns(owner_id)


def require_authenticated(principal: Principal) -> str:
    """Return the caller's user id, or raise ``NotAuthenticatedError``."""
    if not principal.is_authenticated:
        raise NotAuthenticatedError()
    return principal.user_id


def require_admin(principal: Principal, message: str = "Unauthorized") -> str:
    if not principal.is_admin:
        raise NotAuthorizedError(message)
    return principal.user_id
