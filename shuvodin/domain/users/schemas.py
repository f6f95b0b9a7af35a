"""Profile schemas - public and owner views of a user"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..bookings.schemas import BookingCounts, BookingResponse
from ..reviews.schemas import ReviewResponse
from ..vendors.schemas import ImageResponse, VendorSummary


class ProfileCounts(BaseModel):
    reviews: int = 0
    favorites: int = 0
    bookings: int = 0


class VendorBookingsPreview(BaseModel):
    pending: list[BookingResponse]
    confirmed: list[BookingResponse]
    counts: BookingCounts


class UserProfileResponse(BaseModel):
    id: int
    username: str
    name: Optional[str] = None
    image: Optional[ImageResponse] = None
    joinedAt: Optional[datetime] = None
    counts: ProfileCounts
    vendor: Optional[VendorSummary] = None
    isOwner: bool = False

    # Owner-only sections, None for everyone else
    favorites: Optional[list[VendorSummary]] = None
    reviews: Optional[list[ReviewResponse]] = None
    bookings: Optional[list[BookingResponse]] = None
    vendorBookings: Optional[VendorBookingsPreview] = None
