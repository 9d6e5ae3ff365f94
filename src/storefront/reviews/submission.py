"""Review submission, revision and deletion: commands and handler.

Each change refreshes the reviewed product's average rating in the same
unit of work.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.reviews.review import Review, average_rating
from storefront.shared.errors import NotAuthorizedError
from storefront.shared.identifiers import ensure_identifier

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Review")
class AddReview:
    user_id: Identifier(required=True)
    product_id: String(required=True, sanitize=False)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: String(max_length=1000, sanitize=False)


@storefront.command(part_of="Review")
class UpdateReview:
    user_id: Identifier(required=True)
    review_id: String(required=True, sanitize=False)
    rating: Integer(min_value=1, max_value=5)
    comment: String(max_length=1000, sanitize=False)


@storefront.command(part_of="Review")
class DeleteReview:
    user_id: Identifier(required=True)
    review_id: String(required=True, sanitize=False)


def _refresh_rating(product_id, excluding_review_id, extra_rating=None):
    """Recompute a product's average from its other reviews plus ``extra_rating``."""
    product = current_domain.repository_for(Product).get_or_none(str(product_id))
    if product is None:
        return

    ratings = [
        review.rating
        for review in current_domain.repository_for(Review).for_product(product_id)
        if str(review.id) != str(excluding_review_id)
    ]
    if extra_rating is not None:
        ratings.append(extra_rating)

    product.record_rating(average_rating(ratings))
    current_domain.repository_for(Product).add(product)


def _owned_review(review_id, user_id, action):
    review = current_domain.repository_for(Review).get_or_none(review_id)
    if review is None:
        raise ObjectNotFoundError("Review not found")
    if str(review.user_id) != str(user_id):
        raise NotAuthorizedError(f"You are not authorized to {action} this review")
    return review


@storefront.command_handler(part_of=Review)
class ReviewHandler:
    @handle(AddReview)
    def add_review(self, command):
        product_id = ensure_identifier(command.product_id, "product")

        product = current_domain.repository_for(Product).get_or_none(product_id)
        if product is None or not product.is_active:
            raise ObjectNotFoundError("Product not found")

        repo = current_domain.repository_for(Review)
        if repo.by_user_for_product(command.user_id, product_id) is not None:
            raise ValidationError({"product_id": ["You have already reviewed this product"]})

        review = Review.write(
            product_id=product_id,
            user_id=command.user_id,
            rating=command.rating,
            comment=command.comment,
        )
        repo.add(review)
        _refresh_rating(product_id, review.id, review.rating)

        logger.info("Review added", review_id=str(review.id), product_id=product_id)
        return str(review.id)

    @handle(UpdateReview)
    def update_review(self, command):
        review_id = ensure_identifier(command.review_id, "review")
        review = _owned_review(review_id, command.user_id, "update")

        review.revise(rating=command.rating, comment=command.comment)
        current_domain.repository_for(Review).add(review)
        _refresh_rating(review.product_id, review.id, review.rating)
        return review_id

    @handle(DeleteReview)
    def delete_review(self, command):
        review_id = ensure_identifier(command.review_id, "review")
        review = _owned_review(review_id, command.user_id, "delete")

        product_id = review.product_id
        current_domain.repository_for(Review)._dao.delete(review)
        _refresh_rating(product_id, review_id)

        logger.info("Review deleted", review_id=review_id, product_id=str(product_id))
        return True


def reviews_for_product(product_id) -> list[Review]:
    product_id = ensure_identifier(product_id, "product")
    return current_domain.repository_for(Review).for_product(product_id)
