"""Favorites service - vendor shortlist toggling and listing"""

import logging

from fastapi import HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ...models import User
from ..vendors.repository import VendorRepository
from ..vendors.schemas import VendorSummary
from ..vendors.service import vendor_summary
from .repository import FavoriteRepository

logger = logging.getLogger(__name__)


class FavoriteToggleRequest(BaseModel):
    vendorId: int


class FavoriteToggleResponse(BaseModel):
    message: str
    isFavorited: bool


def favorite_summaries(db: Session, user: User) -> list[VendorSummary]:
    """The user's shortlisted vendors as search-style cards"""
    vendors = FavoriteRepository.get_favorite_vendors(db, user.id)
    vendor_ids = [v.id for v in vendors]
    prices = VendorRepository.get_starting_prices(db, vendor_ids)
    review_counts = VendorRepository.get_review_counts(db, vendor_ids)
    return [
        vendor_summary(
            vendor,
            starting_price=prices.get(vendor.id),
            review_count=review_counts.get(vendor.id, 0),
            is_favorited=True,
        )
        for vendor in vendors
    ]


class FavoriteService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = FavoriteRepository()

    def toggle(self, user: User, vendor_id: int) -> FavoriteToggleResponse:
        if not VendorRepository.get_vendor_by_id(self.db, vendor_id):
            raise HTTPException(status_code=404, detail="Vendor not found")

        if self.repo.is_favorited(self.db, user.id, vendor_id):
            self.repo.remove(self.db, user.id, vendor_id)
            logger.info(f"💔 User {user.id} removed vendor {vendor_id} from shortlist")
            return FavoriteToggleResponse(message="Vendor removed from shortlist!", isFavorited=False)

        self.repo.add(self.db, user.id, vendor_id)
        logger.info(f"❤️ User {user.id} shortlisted vendor {vendor_id}")
        return FavoriteToggleResponse(message="Vendor shortlisted!", isFavorited=True)

    def list_favorites(self, user: User) -> list[VendorSummary]:
        return favorite_summaries(self.db, user)
