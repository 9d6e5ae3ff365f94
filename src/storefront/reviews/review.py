"""Review aggregate: one rating and comment per user per product."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront
from storefront.reviews.events import ReviewAdded, ReviewRevised


@storefront.aggregate
class Review:
    product_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: String(max_length=1000, sanitize=False)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def write(cls, product_id, user_id, rating, comment=None):
        now = datetime.now(UTC)
        review = cls(
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            comment=comment,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewAdded(
                review_id=str(review.id),
                product_id=str(product_id),
                user_id=str(user_id),
                rating=rating,
            )
        )
        return review

    def revise(self, rating=None, comment=None):
        if rating is not None:
            self.rating = rating
        if comment is not None:
            self.comment = comment
        self.updated_at = datetime.now(UTC)

        self.raise_(ReviewRevised(review_id=str(self.id), product_id=str(self.product_id), rating=self.rating))


@storefront.repository(part_of=Review)
class ReviewRepository:
    def for_product(self, product_id) -> list[Review]:
        return self.query.filter(product_id=str(product_id)).order_by("-created_at").limit(None).all().items

    def by_user_for_product(self, user_id, product_id) -> Review | None:
        return self.query.filter(user_id=str(user_id), product_id=str(product_id)).all().first


def average_rating(ratings) -> float:
    ratings = list(ratings)
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)
