"""Account management: sign-up, sign-in and admin promotion."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.shared.errors import NotAuthenticatedError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class SignUp:
    name = String(required=True, min_length=2, max_length=50, sanitize=False)
    email = String(required=True, max_length=254, sanitize=False)
    password = String(required=True, min_length=6, max_length=72, sanitize=False)


@storefront.command(part_of="User")
class PromoteToAdmin:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class AccountHandler:
    @handle(SignUp)
    def sign_up(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            logger.warning("Sign-up rejected, email taken", email=command.email)
            raise ValidationError({"email": ["Email already registered"]})

        user = User.register(name=command.name, email=command.email, password=command.password)
        repo.add(user)

        logger.info("User signed up", user_id=str(user.id))
        return str(user.id)

    @handle(PromoteToAdmin)
    def promote_to_admin(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get_or_none(command.user_id)
        if user is None:
            raise ObjectNotFoundError("User not found")

        user.promote()
        repo.add(user)
        logger.info("User promoted to admin", user_id=str(user.id))
        return str(user.id)


def authenticate(email: str, password: str) -> User:
    """Return the user owning these credentials.

    Unknown emails and wrong passwords fail the same way.
    """
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None:
        logger.warning("Login failed, unknown email", email=email)
        raise NotAuthenticatedError("Invalid credentials")
    if not user.check_password(password):
        logger.warning("Login failed, password mismatch", email=email)
        raise NotAuthenticatedError("Invalid credentials")

    logger.info("User logged in", user_id=str(user.id))
    return user


def fetch_user(user_id: str) -> User:
    user = current_domain.repository_for(User).get_or_none(user_id)
    if user is None:
        raise ObjectNotFoundError("User not found")
    return user
