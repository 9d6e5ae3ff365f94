"""User aggregate: storefront accounts and their roles."""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.identity.events import UserPromoted, UserSignedUp
from storefront.identity.passwords import hash_password, verify_password

_EMAIL_PATTERN = re.compile(r"^[^@\s;,<>()\[\]\\\"]+@[^@\s;,<>()\[\]\\\"]+\.[^@\s;,<>()\[\]\\\".]+$")


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


@storefront.aggregate
class User:
    name = String(required=True, min_length=2, max_length=50, sanitize=False)
    email = String(required=True, max_length=254, unique=True, sanitize=False)
    password_hash = String(required=True, max_length=128, sanitize=False)
    role = String(choices=UserRole, default=UserRole.USER.value)
    created_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        email = self.email or ""
        local_part = email.split("@", 1)[0]
        if not _EMAIL_PATTERN.match(email) or ".." in email or local_part.startswith("."):
            raise ValidationError({"email": ["Email must be a valid email address"]})

    @classmethod
    def register(cls, name, email, password, role=UserRole.USER.value):
        user = cls(
            name=name.strip(),
            email=email.strip().lower(),
            password_hash=hash_password(password),
            role=role,
            created_at=datetime.now(UTC),
        )
        user.raise_(UserSignedUp(user_id=str(user.id), email=user.email, role=user.role))
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def check_password(self, password) -> bool:
        return verify_password(password, self.password_hash)

    def promote(self):
        if self.is_admin:
            return
        self.role = UserRole.ADMIN.value
        self.raise_(UserPromoted(user_id=str(self.id), role=self.role))


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        if not email:
            return None
        return self.query.filter(email=email.strip().lower()).all().first
