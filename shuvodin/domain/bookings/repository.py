"""Booking repository - Database operations for the booking lifecycle"""

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import (
    BOOKING_CONFIRMED,
    BOOKING_PENDING,
    Booking,
    Package,
    Vendor,
)

ACTIVE_STATUSES = (BOOKING_PENDING, BOOKING_CONFIRMED)


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def _with_relations(query):
        return query.options(
            joinedload(Booking.vendor),
            joinedload(Booking.user),
            joinedload(Booking.package),
        )

    @staticmethod
    def get_vendor(db: Session, vendor_id: int) -> Optional[Vendor]:
        return db.query(Vendor).filter(Vendor.id == vendor_id).first()

    @staticmethod
    def get_vendor_package(db: Session, vendor_id: int, package_id: int) -> Optional[Package]:
        return (
            db.query(Package)
            .filter(Package.id == package_id, Package.vendor_id == vendor_id)
            .first()
        )

    @staticmethod
    def has_active_request(db: Session, user_id: int, vendor_id: int, booking_date: date) -> bool:
        """Whether the user already has a pending/confirmed booking with this vendor on this date"""
        return (
            db.query(Booking.id)
            .filter(
                Booking.user_id == user_id,
                Booking.vendor_id == vendor_id,
                Booking.date == booking_date,
                Booking.status.in_(ACTIVE_STATUSES),
            )
            .first()
            is not None
        )

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        booking = Booking(status=BOOKING_PENDING, **booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def get_user_booking(db: Session, user_id: int, booking_id: int) -> Optional[Booking]:
        return (
            BookingRepository._with_relations(db.query(Booking))
            .filter(Booking.id == booking_id, Booking.user_id == user_id)
            .first()
        )

    @staticmethod
    def get_vendor_booking(db: Session, vendor_id: int, booking_id: int) -> Optional[Booking]:
        return (
            BookingRepository._with_relations(db.query(Booking))
            .filter(Booking.id == booking_id, Booking.vendor_id == vendor_id)
            .first()
        )

    @staticmethod
    def get_user_bookings(db: Session, user_id: int, status: Optional[str] = None) -> list[Booking]:
        query = BookingRepository._with_relations(db.query(Booking)).filter(Booking.user_id == user_id)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.date.desc(), Booking.id.desc()).all()

    @staticmethod
    def get_upcoming_vendor_bookings(
        db: Session,
        vendor_id: int,
        today: date,
        statuses=ACTIVE_STATUSES,
        limit: int = 20,
    ) -> list[Booking]:
        """Upcoming bookings, pending before confirmed, soonest first"""
        return (
            BookingRepository._with_relations(db.query(Booking))
            .filter(
                Booking.vendor_id == vendor_id,
                Booking.date >= today,
                Booking.status.in_(statuses),
            )
            .order_by(Booking.status.desc(), Booking.date.asc(), Booking.id.asc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def count_by_status(db: Session, vendor_id: int, today: Optional[date] = None) -> dict:
        query = db.query(Booking.status, func.count(Booking.id)).filter(Booking.vendor_id == vendor_id)
        if today is not None:
            query = query.filter(Booking.date >= today)
        return dict(query.group_by(Booking.status).all())

    @staticmethod
    def lock_vendor(db: Session, vendor_id: int) -> Vendor:
        """Re-read the vendor row with FOR UPDATE; a no-op lock on SQLite"""
        return db.query(Vendor).filter(Vendor.id == vendor_id).with_for_update().one()

    @staticmethod
    def lock_booking(db: Session, booking_id: int) -> Booking:
        """Re-read the booking with FOR UPDATE, overwriting any stale loaded state"""
        return (
            db.query(Booking)
            .filter(Booking.id == booking_id)
            .populate_existing()
            .with_for_update()
            .one()
        )

    @staticmethod
    def count_confirmed_on(db: Session, vendor_id: int, booking_date: date) -> int:
        return (
            db.query(func.count(Booking.id))
            .filter(
                Booking.vendor_id == vendor_id,
                Booking.date == booking_date,
                Booking.status == BOOKING_CONFIRMED,
            )
            .scalar()
        ) or 0

    @staticmethod
    def set_status(db: Session, booking: Booking, status: str) -> Booking:
        booking.status = status
        db.commit()
        db.refresh(booking)
        return booking
