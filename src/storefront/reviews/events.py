"""Domain events for the Review aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewAdded:
    """A customer reviewed a product."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)


@storefront.event(part_of="Review")
class ReviewRevised:
    """A customer changed the rating or comment of their review."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
