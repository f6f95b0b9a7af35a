"""Booking service - request, accept, decline and cancel"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import (
    BOOKING_CANCELLED,
    BOOKING_CONFIRMED,
    BOOKING_DECLINED,
    BOOKING_PENDING,
    BOOKING_STATUSES,
    Booking,
    User,
    Vendor,
)
from ...security_utils import strip_html
from .repository import ACTIVE_STATUSES, BookingRepository
from .schemas import (
    BookingActionResponse,
    BookingCounts,
    BookingCreate,
    BookingPackage,
    BookingResponse,
    VendorBookingInbox,
)

logger = logging.getLogger(__name__)


def format_booking_date(value: date) -> str:
    """13 Mar, 2026"""
    return value.strftime("%d %b, %Y")


def booking_response(booking: Booking) -> BookingResponse:
    return BookingResponse(
        id=booking.id,
        vendorId=booking.vendor_id,
        vendorSlug=booking.vendor.slug,
        vendorName=booking.vendor.business_name,
        customerUsername=booking.user.username,
        customerName=booking.user.name,
        date=booking.date,
        status=booking.status,
        totalPrice=booking.total_price or 0,
        message=booking.message,
        package=(
            BookingPackage(id=booking.package.id, title=booking.package.title, price=booking.package.price)
            if booking.package
            else None
        ),
        created_at=booking.created_at,
    )


def booking_counts(counts: dict) -> BookingCounts:
    return BookingCounts(**{status: counts.get(status, 0) for status in BOOKING_STATUSES})


class BookingService:
    """Service layer for bookings"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()

    # ==================== Customer side ====================

    def request_booking(self, user: User, data: BookingCreate) -> BookingResponse:
        if data.date < date.today():
            raise HTTPException(status_code=400, detail="Booking date cannot be in the past")

        vendor = self.repo.get_vendor(self.db, data.vendorId)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor not found")
        if vendor.owner_id == user.id:
            raise HTTPException(status_code=400, detail="You cannot book your own vendor")

        total_price = 0.0
        if data.packageId is not None:
            package = self.repo.get_vendor_package(self.db, vendor.id, data.packageId)
            if not package:
                raise HTTPException(status_code=400, detail="Package does not belong to this vendor")
            total_price = package.price

        if self.repo.has_active_request(self.db, user.id, vendor.id, data.date):
            raise HTTPException(
                status_code=409, detail="You already have a booking request for this date"
            )

        booking = self.repo.create_booking(
            self.db,
            user_id=user.id,
            vendor_id=vendor.id,
            package_id=data.packageId,
            date=data.date,
            total_price=total_price,
            message=strip_html(data.message),
        )
        logger.info(f"📅 Booking {booking.id} requested by user {user.id} for vendor {vendor.id} on {data.date}")
        return booking_response(booking)

    def list_user_bookings(self, user: User, status: Optional[str] = None) -> list[BookingResponse]:
        if status and status not in BOOKING_STATUSES:
            raise HTTPException(
                status_code=400, detail=f"status must be one of: {', '.join(BOOKING_STATUSES)}"
            )
        return [booking_response(b) for b in self.repo.get_user_bookings(self.db, user.id, status)]

    def cancel_booking(self, user: User, booking_id: int) -> BookingActionResponse:
        booking = self.repo.get_user_booking(self.db, user.id, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        booking = self.repo.lock_booking(self.db, booking.id)
        if booking.status not in ACTIVE_STATUSES:
            raise HTTPException(status_code=400, detail=f"Cannot cancel a {booking.status} booking")

        booking = self.repo.set_status(self.db, booking, BOOKING_CANCELLED)
        logger.info(f"🚫 Booking {booking.id} cancelled by user {user.id}")
        return BookingActionResponse(message="Booking cancelled", booking=booking_response(booking))

    # ==================== Vendor side ====================

    def get_inbox(self, vendor: Vendor) -> VendorBookingInbox:
        today = date.today()
        bookings = self.repo.get_upcoming_vendor_bookings(self.db, vendor.id, today)
        counts = self.repo.count_by_status(self.db, vendor.id, today)
        return VendorBookingInbox(
            bookings=[booking_response(b) for b in bookings],
            counts=booking_counts(counts),
        )

    def _get_vendor_booking(self, vendor: Vendor, booking_id: int) -> Booking:
        booking = self.repo.get_vendor_booking(self.db, vendor.id, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    def accept_booking(self, vendor: Vendor, booking_id: int) -> BookingActionResponse:
        """
        Confirm a pending booking unless the vendor is already full that day.

        The vendor row stays locked from the count until the status write so
        two concurrent accepts for the same date cannot both pass the check.
        """
        booking = self._get_vendor_booking(vendor, booking_id)
        if booking.status != BOOKING_PENDING:
            raise HTTPException(status_code=400, detail=f"Cannot accept a {booking.status} booking")

        locked_vendor = self.repo.lock_vendor(self.db, vendor.id)
        booking = self.repo.lock_booking(self.db, booking.id)
        if booking.status != BOOKING_PENDING:
            self.db.rollback()
            raise HTTPException(status_code=400, detail=f"Cannot accept a {booking.status} booking")

        confirmed = self.repo.count_confirmed_on(self.db, vendor.id, booking.date)
        if confirmed >= locked_vendor.daily_booking_limit:
            self.db.rollback()
            logger.warning(
                f"⚠️ Vendor {vendor.id} hit daily limit ({locked_vendor.daily_booking_limit}) on {booking.date}"
            )
            raise HTTPException(status_code=409, detail="You have booking on this date.")

        booking = self.repo.set_status(self.db, booking, BOOKING_CONFIRMED)
        logger.info(f"✅ Booking {booking.id} confirmed by vendor {vendor.id}")
        return BookingActionResponse(
            message=f"Now you got a new booking on {format_booking_date(booking.date)}.",
            booking=booking_response(booking),
        )

    def decline_booking(self, vendor: Vendor, booking_id: int) -> BookingActionResponse:
        booking = self._get_vendor_booking(vendor, booking_id)
        booking = self.repo.lock_booking(self.db, booking.id)
        if booking.status not in ACTIVE_STATUSES:
            raise HTTPException(status_code=400, detail=f"Cannot decline a {booking.status} booking")

        booking = self.repo.set_status(self.db, booking, BOOKING_DECLINED)
        logger.info(f"❌ Booking {booking.id} declined by vendor {vendor.id}")
        return BookingActionResponse(message="Booking declined", booking=booking_response(booking))
