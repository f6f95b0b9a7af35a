"""Booking routers - customer requests and the vendor inbox"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_vendor
from ...database import get_db
from ...models import User, Vendor
from ...rate_limiter import create_rate_limiter
from .schemas import BookingActionResponse, BookingCreate, BookingResponse, VendorBookingInbox
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])
vendor_router = APIRouter(prefix="/vendors/bookings", tags=["Vendor Bookings"])

# 20 booking requests per hour per IP
rate_limit_booking_requests = create_rate_limiter(
    limit=20, window_seconds=3600, key_prefix="booking_request", use_ip=True
)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.post("", response_model=BookingResponse, status_code=201)
async def request_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
    _: None = Depends(rate_limit_booking_requests),
):
    """Send a booking request to a vendor"""
    return service.request_booking(current_user, data)


@router.get("", response_model=list[BookingResponse])
async def list_my_bookings(
    status: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.list_user_bookings(current_user, status)


@router.post("/{booking_id}/cancel", response_model=BookingActionResponse)
async def cancel_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.cancel_booking(current_user, booking_id)


# ============================================================================
# VENDOR INBOX
# ============================================================================


@vendor_router.get("", response_model=VendorBookingInbox)
async def get_vendor_bookings(
    vendor: Vendor = Depends(require_vendor),
    service: BookingService = Depends(get_booking_service),
):
    """Upcoming pending and confirmed bookings with per-status counts"""
    return service.get_inbox(vendor)


@vendor_router.post("/{booking_id}/accept", response_model=BookingActionResponse)
async def accept_booking(
    booking_id: int,
    vendor: Vendor = Depends(require_vendor),
    service: BookingService = Depends(get_booking_service),
):
    return service.accept_booking(vendor, booking_id)


@vendor_router.post("/{booking_id}/decline", response_model=BookingActionResponse)
async def decline_booking(
    booking_id: int,
    vendor: Vendor = Depends(require_vendor),
    service: BookingService = Depends(get_booking_service),
):
    return service.decline_booking(vendor, booking_id)
