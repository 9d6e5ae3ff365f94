"""Tests for bearer token issuing and resolution."""

from datetime import UTC, datetime, timedelta

import jwt
from storefront.domain import storefront
from storefront.identity.principal import Role
from storefront.identity.tokens import issue_token, principal_from_header, principal_from_token
from storefront.identity.user import User


def _user(role="user"):
    user = User.register(name="Jane", email="jane@example.com", password="secret-pass")
    if role == "admin":
        user.promote()
    return user


class TestIssueToken:
    def test_token_carries_identity_claims(self):
        user = _user()
        payload = jwt.decode(issue_token(user), storefront.JWT_SECRET, algorithms=["HS256"])
        assert payload["id"] == str(user.id)
        assert payload["email"] == "jane@example.com"
        assert payload["role"] == "user"
        assert "exp" in payload


class TestPrincipalFromToken:
    def test_user_token_resolves_to_user(self):
        user = _user()
        principal = principal_from_token(issue_token(user))
        assert principal.role == Role.USER
        assert principal.user_id == str(user.id)

    def test_admin_token_resolves_to_admin(self):
        principal = principal_from_token(issue_token(_user(role="admin")))
        assert principal.is_admin

    def test_missing_token_is_anonymous(self):
        assert not principal_from_token(None).is_authenticated

    def test_garbage_token_is_anonymous(self):
        assert not principal_from_token("not-a-token").is_authenticated

    def test_expired_token_is_anonymous(self):
        assert not principal_from_token(issue_token(_user(), ttl_minutes=-1)).is_authenticated

    def test_token_signed_with_other_secret_is_anonymous(self):
        token = jwt.encode(
            {"id": "user-1", "role": "admin", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            "some-other-secret",
            algorithm="HS256",
        )
        assert not principal_from_token(token).is_authenticated

    def test_token_without_id_is_anonymous(self):
        token = jwt.encode(
            {"email": "jane@example.com", "exp": datetime.now(UTC) + timedelta(minutes=5)},
            storefront.JWT_SECRET,
            algorithm="HS256",
        )
        assert not principal_from_token(token).is_authenticated


class TestPrincipalFromHeader:
    def test_bearer_header(self):
        user = _user()
        principal = principal_from_header(f"Bearer {issue_token(user)}")
        assert principal.user_id == str(user.id)

    def test_scheme_is_case_insensitive(self):
        principal = principal_from_header(f"bearer {issue_token(_user())}")
        assert principal.is_authenticated

    def test_other_scheme_is_anonymous(self):
        assert not principal_from_header(f"Basic {issue_token(_user())}").is_authenticated

    def test_empty_header_is_anonymous(self):
        assert not principal_from_header("").is_authenticated
        assert not principal_from_header("Bearer ").is_authenticated
