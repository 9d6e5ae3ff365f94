"""Bearer tokens: issuing them for users and resolving them into principals."""

from datetime import UTC, datetime, timedelta

import jwt
import structlog

from storefront.domain import storefront
from storefront.identity.principal import Principal, Role

logger = structlog.get_logger(__name__)


def _secret() -> str:
    return storefront.JWT_SECRET


def _algorithm() -> str:
    return getattr(storefront, "JWT_ALGORITHM", "HS256")


def issue_token(user, ttl_minutes: int | None = None) -> str:
    """Sign a token carrying the user's id, email and role."""
    ttl = ttl_minutes if ttl_minutes is not None else int(getattr(storefront, "JWT_TTL_MINUTES", 60))
    payload = {
        "id": str(user.id),
        "email": user.email,
        "role": user.role,
        "exp": datetime.now(UTC) + timedelta(minutes=ttl),
    }
    return jwt.encode(payload, _secret(), algorithm=_algorithm())


def principal_from_token(token: str | None) -> Principal:
    """Resolve a raw token into a principal.

    Missing, malformed, expired or badly signed tokens all resolve to the
    anonymous principal; operations that need a user reject it later.
    """
    if not token:
        return Principal.anonymous()

    try:
        payload = jwt.decode(token, _secret(), algorithms=[_algorithm()])
    except jwt.PyJWTError as exc:
        logger.info("Rejected bearer token", reason=str(exc))
        return Principal.anonymous()

    user_id = payload.get("id")
    if not user_id:
        return Principal.anonymous()

    if payload.get("role") == Role.ADMIN.value:
        return Principal.admin(user_id, payload.get("email"))
    return Principal.user(user_id, payload.get("email"))


def principal_from_header(authorization: str | None) -> Principal:
    """Resolve an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return Principal.anonymous()

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return Principal.anonymous()
    return principal_from_token(token.strip())
