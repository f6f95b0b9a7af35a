"""Vendor repository - Database queries for browsing and search"""

from typing import Optional

from sqlalchemy import and_, distinct, exists, func, or_
from sqlalchemy.orm import Session, contains_eager, joinedload, selectinload

from ...models import (
    Package,
    Review,
    Vendor,
    VendorType,
    VenueDetails,
    VenueSpace,
    favorites,
)


class VendorRepository:
    """Repository for vendor database operations"""

    @staticmethod
    def get_vendor_types(db: Session) -> list[VendorType]:
        return db.query(VendorType).order_by(VendorType.name.asc()).all()

    @staticmethod
    def get_vendor_by_slug(db: Session, slug: str) -> Optional[Vendor]:
        return (
            db.query(Vendor)
            .options(
                joinedload(Vendor.vendor_type),
                joinedload(Vendor.owner),
                selectinload(Vendor.gallery),
                selectinload(Vendor.packages),
                joinedload(Vendor.venue_details),
            )
            .filter(Vendor.slug == slug)
            .first()
        )

    @staticmethod
    def get_vendor_by_id(db: Session, vendor_id: int) -> Optional[Vendor]:
        return db.query(Vendor).filter(Vendor.id == vendor_id).first()

    @staticmethod
    def search_vendors(
        db: Session,
        vendor_type: Optional[str] = None,
        query: Optional[str] = None,
        city: Optional[str] = None,
        address: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        min_capacity: Optional[int] = None,
        max_capacity: Optional[int] = None,
        sort_order: str = "relevance",
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[tuple[Vendor, Optional[float]]], int]:
        """
        Filtered, sorted page of vendors with their starting (cheapest package) price.

        Returns:
            Tuple of ([(vendor, starting_price), ...], total_matching)
        """
        starting_price = (
            db.query(Package.vendor_id.label("vendor_id"), func.min(Package.price).label("starting_price"))
            .group_by(Package.vendor_id)
            .subquery()
        )

        q = (
            db.query(Vendor, starting_price.c.starting_price)
            .join(VendorType, Vendor.vendor_type_id == VendorType.id)
            .outerjoin(starting_price, starting_price.c.vendor_id == Vendor.id)
        )

        if vendor_type:
            q = q.filter(VendorType.slug == vendor_type.lower())
        if query:
            q = q.filter(Vendor.business_name.ilike(f"%{query}%"))
        if city:
            city = city.lower()
            q = q.filter(or_(func.lower(Vendor.district) == city, func.lower(Vendor.thana) == city))
        if address:
            q = q.filter(Vendor.address.ilike(f"%{address}%"))

        if min_price is not None or max_price is not None:
            price_conditions = [Package.vendor_id == Vendor.id]
            if min_price is not None:
                price_conditions.append(Package.price >= min_price)
            if max_price is not None:
                price_conditions.append(Package.price <= max_price)
            q = q.filter(exists().where(and_(*price_conditions)))

        if min_capacity is not None or max_capacity is not None:
            capacity_match = []
            for column in (VenueSpace.sitting_capacity, VenueSpace.standing_capacity):
                bounds = []
                if min_capacity is not None:
                    bounds.append(column >= min_capacity)
                if max_capacity is not None:
                    bounds.append(column <= max_capacity)
                capacity_match.append(and_(*bounds))
            q = q.filter(
                exists().where(
                    and_(
                        VenueSpace.venue_details_id == VenueDetails.id,
                        VenueDetails.vendor_id == Vendor.id,
                        or_(*capacity_match),
                    )
                )
            )

        total = q.order_by(None).count()

        if sort_order == "price":
            q = q.order_by(
                starting_price.c.starting_price.is_(None),
                starting_price.c.starting_price.asc(),
                Vendor.id.asc(),
            )
        elif sort_order == "rating":
            q = q.order_by(Vendor.rating.desc(), Vendor.id.asc())
        else:
            q = q.order_by(Vendor.rating.desc(), Vendor.created_at.desc(), Vendor.id.desc())

        rows = (
            q.options(contains_eager(Vendor.vendor_type), selectinload(Vendor.gallery))
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    @staticmethod
    def get_review_counts(db: Session, vendor_ids: list[int]) -> dict[int, int]:
        if not vendor_ids:
            return {}
        rows = (
            db.query(Review.vendor_id, func.count(Review.id))
            .filter(Review.vendor_id.in_(vendor_ids))
            .group_by(Review.vendor_id)
            .all()
        )
        return dict(rows)

    @staticmethod
    def get_favorited_ids(db: Session, user_id: int, vendor_ids: list[int]) -> set[int]:
        if not vendor_ids:
            return set()
        rows = db.execute(
            favorites.select().where(
                and_(favorites.c.user_id == user_id, favorites.c.vendor_id.in_(vendor_ids))
            )
        ).fetchall()
        return {row.vendor_id for row in rows}

    @staticmethod
    def get_starting_price(db: Session, vendor_id: int) -> Optional[float]:
        return db.query(func.min(Package.price)).filter(Package.vendor_id == vendor_id).scalar()

    @staticmethod
    def get_starting_prices(db: Session, vendor_ids: list[int]) -> dict[int, float]:
        if not vendor_ids:
            return {}
        rows = (
            db.query(Package.vendor_id, func.min(Package.price))
            .filter(Package.vendor_id.in_(vendor_ids))
            .group_by(Package.vendor_id)
            .all()
        )
        return dict(rows)

    @staticmethod
    def search_locations(db: Session, query: str, limit: int = 10) -> tuple[list[str], list[str]]:
        """Distinct cities (district or thana) and addresses containing ``query``"""
        pattern = f"%{query}%"
        cities: list[str] = []
        for column in (Vendor.district, Vendor.thana):
            for (value,) in (
                db.query(distinct(column)).filter(column.ilike(pattern)).order_by(column).limit(limit)
            ):
                if value and value not in cities:
                    cities.append(value)

        addresses = [
            value
            for (value,) in db.query(distinct(Vendor.address))
            .filter(Vendor.address.isnot(None), Vendor.address.ilike(pattern))
            .order_by(Vendor.address)
            .limit(limit)
            if value
        ]
        return cities[:limit], addresses
