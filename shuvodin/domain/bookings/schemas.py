"""Booking domain schemas"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    vendorId: int
    date: date
    packageId: Optional[int] = None
    message: Optional[str] = Field(None, max_length=1000)


class BookingPackage(BaseModel):
    id: int
    title: str
    price: float


class BookingResponse(BaseModel):
    id: int
    vendorId: int
    vendorSlug: str
    vendorName: str
    customerUsername: str
    customerName: Optional[str] = None
    date: date
    status: str
    totalPrice: float
    message: Optional[str] = None
    package: Optional[BookingPackage] = None
    created_at: Optional[datetime] = None


class BookingActionResponse(BaseModel):
    message: str
    booking: BookingResponse


class BookingCounts(BaseModel):
    pending: int = 0
    confirmed: int = 0
    declined: int = 0
    cancelled: int = 0


class VendorBookingInbox(BaseModel):
    bookings: list[BookingResponse]
    counts: BookingCounts
