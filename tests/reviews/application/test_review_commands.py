"""Application tests for adding, revising and deleting reviews."""

from uuid import uuid4

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.management import DeactivateProduct
from storefront.catalogue.product import Product
from storefront.reviews.review import Review
from storefront.reviews.submission import AddReview, DeleteReview, UpdateReview, reviews_for_product
from storefront.shared.errors import NotAuthorizedError


@pytest.fixture()
def author_id():
    return str(uuid4())


def _add(user_id, product_id, rating=4, comment="Does the job."):
    return current_domain.process(
        AddReview(user_id=user_id, product_id=product_id, rating=rating, comment=comment),
        asynchronous=False,
    )


def _average(product_id):
    return current_domain.repository_for(Product).get(product_id).average_rating


class TestAddReviewCommand:
    def test_add_persists_and_updates_average(self, author_id, product_id):
        review_id = _add(author_id, product_id, rating=5)

        assert current_domain.repository_for(Review).get(review_id).rating == 5
        assert _average(product_id) == 5.0

    def test_average_across_reviews(self, product_id):
        _add(str(uuid4()), product_id, rating=5)
        _add(str(uuid4()), product_id, rating=4)
        _add(str(uuid4()), product_id, rating=4)
        assert _average(product_id) == 13 / 3

    def test_one_review_per_user_and_product(self, author_id, product_id):
        _add(author_id, product_id)
        with pytest.raises(ValidationError) as exc:
            _add(author_id, product_id)
        assert exc.value.messages == {"product_id": ["You have already reviewed this product"]}

    def test_inactive_product_cannot_be_reviewed(self, author_id, product_id):
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _add(author_id, product_id)

    def test_malformed_product_id(self, author_id):
        with pytest.raises(ValidationError) as exc:
            _add(author_id, "abc")
        assert exc.value.messages == {"product_id": ["Invalid product ID"]}


class TestUpdateReviewCommand:
    def test_owner_revises_and_average_follows(self, author_id, product_id):
        review_id = _add(author_id, product_id, rating=5)
        _add(str(uuid4()), product_id, rating=3)

        current_domain.process(UpdateReview(user_id=author_id, review_id=review_id, rating=1), asynchronous=False)

        assert current_domain.repository_for(Review).get(review_id).comment == "Does the job."
        assert _average(product_id) == 2.0

    def test_other_user_cannot_revise(self, author_id, product_id):
        review_id = _add(author_id, product_id)
        with pytest.raises(NotAuthorizedError) as exc:
            current_domain.process(UpdateReview(user_id=str(uuid4()), review_id=review_id, rating=1), asynchronous=False)
        assert str(exc.value) == "You are not authorized to update this review"

    def test_unknown_review(self, author_id):
        with pytest.raises(ObjectNotFoundError) as exc:
            current_domain.process(UpdateReview(user_id=author_id, review_id=str(uuid4()), rating=1), asynchronous=False)
        assert str(exc.value) == "Review not found"


class TestDeleteReviewCommand:
    def test_owner_deletes_and_average_is_recomputed(self, author_id, product_id):
        review_id = _add(author_id, product_id, rating=5)
        _add(str(uuid4()), product_id, rating=3)

        assert current_domain.process(DeleteReview(user_id=author_id, review_id=review_id), asynchronous=False) is True

        assert current_domain.repository_for(Review).get_or_none(review_id) is None
        assert _average(product_id) == 3.0

    def test_deleting_last_review_resets_average(self, author_id, product_id):
        review_id = _add(author_id, product_id, rating=5)
        current_domain.process(DeleteReview(user_id=author_id, review_id=review_id), asynchronous=False)
        assert _average(product_id) == 0.0

    def test_other_user_cannot_delete(self, author_id, product_id):
        review_id = _add(author_id, product_id)
        with pytest.raises(NotAuthorizedError) as exc:
            current_domain.process(DeleteReview(user_id=str(uuid4()), review_id=review_id), asynchronous=False)
        assert str(exc.value) == "You are not authorized to delete this review"


class TestReviewsForProduct:
    def test_lists_reviews_of_product_only(self, product_id, add_product):
        other_product = add_product()
        mine = _add(str(uuid4()), product_id)
        _add(str(uuid4()), other_product)

        assert [str(r.id) for r in reviews_for_product(product_id)] == [mine]

    def test_malformed_product_id(self):
        with pytest.raises(ValidationError):
            reviews_for_product("abc")
