"""Access errors raised across the storefront.

Validation failures and missing records use Protean's own
``ValidationError`` and ``ObjectNotFoundError``; these two cover the
cases Protean has no vocabulary for.
"""

from protean.exceptions import ProteanException


class NotAuthenticatedError(ProteanException):
    """No signed-in user where one is required."""

    def __init__(self, message: str = "Not authenticated", **kwargs):
        super().__init__(message, **kwargs)


class NotAuthorizedError(ProteanException):
    """A signed-in user lacks the role or ownership an operation needs."""

    def __init__(self, message: str = "Unauthorized", **kwargs):
        super().__init__(message, **kwargs)
