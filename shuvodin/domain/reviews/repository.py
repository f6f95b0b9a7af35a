"""Review repository"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Review, Vendor


class ReviewRepository:
    @staticmethod
    def get_vendor_by_slug(db: Session, slug: str) -> Optional[Vendor]:
        return db.query(Vendor).filter(Vendor.slug == slug).first()

    @staticmethod
    def get_vendor_reviews(db: Session, vendor_id: int) -> list[Review]:
        return (
            db.query(Review)
            .options(joinedload(Review.user), joinedload(Review.vendor))
            .filter(Review.vendor_id == vendor_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
            .all()
        )

    @staticmethod
    def get_user_reviews(db: Session, user_id: int, limit: Optional[int] = None) -> list[Review]:
        query = (
            db.query(Review)
            .options(joinedload(Review.user), joinedload(Review.vendor))
            .filter(Review.user_id == user_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def get_user_review(db: Session, user_id: int, vendor_id: int) -> Optional[Review]:
        return (
            db.query(Review)
            .filter(Review.user_id == user_id, Review.vendor_id == vendor_id)
            .first()
        )

    @staticmethod
    def get_review(db: Session, review_id: int) -> Optional[Review]:
        return db.query(Review).filter(Review.id == review_id).first()

    @staticmethod
    def save(db: Session, review: Review) -> Review:
        db.add(review)
        db.flush()
        return review

    @staticmethod
    def delete(db: Session, review: Review) -> None:
        db.delete(review)
        db.flush()

    @staticmethod
    def recompute_rating(db: Session, vendor: Vendor) -> float:
        """Store the rounded average of the vendor's reviews (0 with none) and commit"""
        average = db.query(func.avg(Review.rating)).filter(Review.vendor_id == vendor.id).scalar()
        vendor.rating = round(float(average), 1) if average is not None else 0
        db.commit()
        return vendor.rating

    @staticmethod
    def count_for_user(db: Session, user_id: int) -> int:
        return db.query(func.count(Review.id)).filter(Review.user_id == user_id).scalar() or 0
