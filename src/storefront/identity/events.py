"""Domain events for the User aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserSignedUp:
    """A new account was registered."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True, max_length=254, sanitize=False)
    role = String(required=True, max_length=20, sanitize=False)


@storefront.event(part_of="User")
class UserPromoted:
    """An account was granted the admin role."""

    __version__ = 1

    user_id = Identifier(required=True)
    role = String(required=True, max_length=20, sanitize=False)
