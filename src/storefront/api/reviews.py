"""FastAPI endpoints for product reviews."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import authenticated_user_id
from storefront.api.schemas import AddReviewRequest, DeletedResponse, ReviewResponse, UpdateReviewRequest
from storefront.reviews.review import Review
from storefront.reviews.submission import AddReview, DeleteReview, UpdateReview, reviews_for_product

review_router = APIRouter(prefix="/reviews", tags=["reviews"])
product_review_router = APIRouter(prefix="/products", tags=["reviews"])


@product_review_router.get("/{product_id}/reviews", response_model=list[ReviewResponse])
async def get_product_reviews(product_id: str) -> list[ReviewResponse]:
    return [ReviewResponse.from_review(review) for review in reviews_for_product(product_id)]


@review_router.post("", status_code=201, response_model=ReviewResponse)
async def add_review(body: AddReviewRequest, user_id: str = Depends(authenticated_user_id)) -> ReviewResponse:
    command = AddReview(user_id=user_id, product_id=body.product_id, rating=body.rating, comment=body.comment)
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewResponse.from_review(current_domain.repository_for(Review).get(review_id))


@review_router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str,
    body: UpdateReviewRequest,
    user_id: str = Depends(authenticated_user_id),
) -> ReviewResponse:
    command = UpdateReview(user_id=user_id, review_id=review_id, rating=body.rating, comment=body.comment)
    review_id = current_domain.process(command, asynchronous=False)
    return ReviewResponse.from_review(current_domain.repository_for(Review).get(review_id))


@review_router.delete("/{review_id}", response_model=DeletedResponse)
async def delete_review(review_id: str, user_id: str = Depends(authenticated_user_id)) -> DeletedResponse:
    current_domain.process(DeleteReview(user_id=user_id, review_id=review_id), asynchronous=False)
    return DeletedResponse(deleted=True)
