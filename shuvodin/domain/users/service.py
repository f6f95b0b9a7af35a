"""Profile service - builds the public profile and the owner's dashboard view"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import BOOKING_CONFIRMED, BOOKING_PENDING, Booking, User
from ..bookings.repository import BookingRepository
from ..bookings.service import booking_counts, booking_response
from ..favorites.repository import FavoriteRepository
from ..favorites.service import favorite_summaries
from ..reviews.repository import ReviewRepository
from ..reviews.service import review_response
from ..vendors.repository import VendorRepository
from ..vendors.service import image_response, vendor_summary
from .schemas import ProfileCounts, UserProfileResponse, VendorBookingsPreview

logger = logging.getLogger(__name__)

PROFILE_REVIEW_LIMIT = 3
VENDOR_BOOKING_PREVIEW_LIMIT = 2


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, username: str, viewer: Optional[User]) -> UserProfileResponse:
        user = (
            self.db.query(User)
            .options(joinedload(User.image), joinedload(User.vendor))
            .filter(User.username == username.lower())
            .first()
        )
        if not user:
            raise HTTPException(status_code=404, detail="User not found")

        is_owner = viewer is not None and viewer.id == user.id
        profile = UserProfileResponse(
            id=user.id,
            username=user.username,
            name=user.name,
            image=image_response(user.image) if user.image else None,
            joinedAt=user.created_at,
            counts=ProfileCounts(
                reviews=ReviewRepository.count_for_user(self.db, user.id),
                favorites=FavoriteRepository.count_for_user(self.db, user.id),
                bookings=self.db.query(func.count(Booking.id)).filter(Booking.user_id == user.id).scalar() or 0,
            ),
            vendor=self._vendor_summary(user),
            isOwner=is_owner,
        )

        if is_owner:
            profile.favorites = favorite_summaries(self.db, user)
            profile.reviews = [
                review_response(r)
                for r in ReviewRepository.get_user_reviews(self.db, user.id, limit=PROFILE_REVIEW_LIMIT)
            ]
            profile.bookings = [
                booking_response(b) for b in BookingRepository.get_user_bookings(self.db, user.id)
            ]
            if user.vendor:
                profile.vendorBookings = self._vendor_bookings_preview(user.vendor.id)

        return profile

    def _vendor_summary(self, user: User):
        if not user.vendor:
            return None
        vendor = user.vendor
        return vendor_summary(
            vendor,
            starting_price=VendorRepository.get_starting_price(self.db, vendor.id),
            review_count=VendorRepository.get_review_counts(self.db, [vendor.id]).get(vendor.id, 0),
        )

    def _vendor_bookings_preview(self, vendor_id: int) -> VendorBookingsPreview:
        today = date.today()
        pending = BookingRepository.get_upcoming_vendor_bookings(
            self.db, vendor_id, today, statuses=(BOOKING_PENDING,), limit=VENDOR_BOOKING_PREVIEW_LIMIT
        )
        confirmed = BookingRepository.get_upcoming_vendor_bookings(
            self.db, vendor_id, today, statuses=(BOOKING_CONFIRMED,), limit=VENDOR_BOOKING_PREVIEW_LIMIT
        )
        return VendorBookingsPreview(
            pending=[booking_response(b) for b in pending],
            confirmed=[booking_response(b) for b in confirmed],
            counts=booking_counts(BookingRepository.count_by_status(self.db, vendor_id, today)),
        )
