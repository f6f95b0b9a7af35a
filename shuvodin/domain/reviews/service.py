"""Review service - one review per user per vendor with a cached average rating"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Review, User
from ...security_utils import strip_html
from .repository import ReviewRepository
from .schemas import ReviewCreate, ReviewResponse, ReviewSubmitResponse

logger = logging.getLogger(__name__)


def review_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        vendorId=review.vendor_id,
        vendorSlug=review.vendor.slug,
        username=review.user.username,
        name=review.user.name,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


class ReviewService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepository()

    def _get_vendor(self, slug: str):
        vendor = self.repo.get_vendor_by_slug(self.db, slug)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor not found")
        return vendor

    def list_reviews(self, slug: str) -> list[ReviewResponse]:
        vendor = self._get_vendor(slug)
        return [review_response(r) for r in self.repo.get_vendor_reviews(self.db, vendor.id)]

    def submit_review(self, user: User, slug: str, data: ReviewCreate) -> ReviewSubmitResponse:
        """Create the caller's review, or update it when one already exists"""
        vendor = self._get_vendor(slug)
        if vendor.owner_id == user.id:
            raise HTTPException(status_code=403, detail="You cannot review your own vendor")

        review = self.repo.get_user_review(self.db, user.id, vendor.id)
        created = review is None
        if created:
            review = Review(user_id=user.id, vendor_id=vendor.id)
        review.rating = data.rating
        review.comment = strip_html(data.comment)

        self.repo.save(self.db, review)
        rating = self.repo.recompute_rating(self.db, vendor)
        self.db.refresh(review)

        logger.info(
            f"⭐ Review {'created' if created else 'updated'} by user {user.id} "
            f"for vendor {vendor.id}, rating now {rating}"
        )
        return ReviewSubmitResponse(review=review_response(review), vendorRating=rating, created=created)

    def delete_review(self, user: User, review_id: int) -> dict:
        review = self.repo.get_review(self.db, review_id)
        if not review or review.user_id != user.id:
            raise HTTPException(status_code=404, detail="Review not found")

        vendor = review.vendor
        self.repo.delete(self.db, review)
        rating = self.repo.recompute_rating(self.db, vendor)
        logger.info(f"🗑️ Review {review_id} deleted by user {user.id}")
        return {"message": "Review deleted", "vendorRating": rating}
