"""Review routers - vendor reviews are nested under the vendor slug"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ReviewCreate, ReviewResponse, ReviewSubmitResponse
from .service import ReviewService

router = APIRouter(tags=["Reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    """Dependency injection for ReviewService"""
    return ReviewService(db)


@router.get("/vendors/{slug}/reviews", response_model=list[ReviewResponse])
async def list_vendor_reviews(slug: str, service: ReviewService = Depends(get_review_service)):
    return service.list_reviews(slug)


@router.post("/vendors/{slug}/reviews", response_model=ReviewSubmitResponse)
async def submit_review(
    slug: str,
    data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    """Leave a review, or update your existing one for this vendor"""
    return service.submit_review(current_user, slug, data)


@router.delete("/reviews/{review_id}")
async def delete_review(
    review_id: int,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    return service.delete_review(current_user, review_id)
