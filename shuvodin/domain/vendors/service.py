"""Vendor service - Business logic for browsing, search and vendor pages"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...catalog import VENDOR_TYPES
from ...locations import get_districts_for_division, get_divisions, get_thanas_for_district
from ...models import User, Vendor, VenueDetails
from .filters import capacity_bounds, get_filter_inputs
from .repository import VendorRepository
from .schemas import (
    CatalogItem,
    ImageResponse,
    LocationSuggestions,
    PackageResponse,
    SocialLink,
    VendorDetailResponse,
    VendorSearchResponse,
    VendorSummary,
    VendorTypeResponse,
    VenueDetailsResponse,
    VenueServiceResponse,
    VenueSpaceResponse,
)

logger = logging.getLogger(__name__)

SORT_ORDERS = ("relevance", "price", "rating")
MAX_PAGE_SIZE = 100


def image_response(image) -> ImageResponse:
    return ImageResponse(id=image.id, objectKey=image.object_key, altText=image.alt_text)


def vendor_summary(
    vendor: Vendor,
    starting_price: Optional[float] = None,
    review_count: int = 0,
    is_favorited: bool = False,
) -> VendorSummary:
    """Card-sized view of a vendor used by search results, favorites and profiles"""
    return VendorSummary(
        id=vendor.id,
        slug=vendor.slug,
        businessName=vendor.business_name,
        vendorType=VendorTypeResponse.model_validate(vendor.vendor_type),
        division=vendor.division,
        district=vendor.district,
        thana=vendor.thana,
        address=vendor.address,
        rating=vendor.rating or 0,
        reviewCount=review_count,
        startingPrice=starting_price,
        coverImage=image_response(vendor.gallery[0]) if vendor.gallery else None,
        isFavorited=is_favorited,
    )


def venue_details_response(details: VenueDetails) -> VenueDetailsResponse:
    return VenueDetailsResponse(
        venueType=CatalogItem(id=details.venue_type.id, name=details.venue_type.name),
        services=[
            VenueServiceResponse(
                id=s.id,
                globalServiceId=s.global_service_id,
                name=s.global_service.name,
                price=s.price,
                description=s.description,
            )
            for s in details.services
        ],
        spaces=[
            VenueSpaceResponse(
                id=s.id,
                globalSpaceId=s.global_space_id,
                name=s.global_space.name,
                price=s.price,
                description=s.description,
                sittingCapacity=s.sitting_capacity,
                standingCapacity=s.standing_capacity,
                parkingCapacity=s.parking_capacity,
            )
            for s in details.spaces
        ],
        amenities=[
            CatalogItem(id=a.global_amenity.id, name=a.global_amenity.name) for a in details.amenities
        ],
        eventTypes=[
            CatalogItem(id=e.global_event_type.id, name=e.global_event_type.name)
            for e in details.event_types
        ],
    )


class VendorService:
    """Service layer for vendor browse/search"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = VendorRepository()

    def search(
        self,
        user: Optional[User],
        vendor_type: Optional[str] = None,
        query: Optional[str] = None,
        city: Optional[str] = None,
        address: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        min_capacity: Optional[int] = None,
        max_capacity: Optional[int] = None,
        capacity: Optional[list[str]] = None,
        sort_order: str = "relevance",
        page: int = 1,
        page_size: int = 20,
    ) -> VendorSearchResponse:
        """Search vendors; capacity chips override explicit min/max capacity"""
        if sort_order not in SORT_ORDERS:
            raise HTTPException(
                status_code=400, detail=f"sortOrder must be one of: {', '.join(SORT_ORDERS)}"
            )
        if min_price is not None and max_price is not None and min_price > max_price:
            raise HTTPException(status_code=400, detail="minPrice cannot be greater than maxPrice")

        if capacity:
            try:
                min_capacity, max_capacity = capacity_bounds(capacity)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e)) from e

        page = max(page, 1)
        page_size = min(max(page_size, 1), MAX_PAGE_SIZE)

        rows, total = self.repo.search_vendors(
            self.db,
            vendor_type=vendor_type,
            query=query,
            city=city,
            address=address,
            min_price=min_price,
            max_price=max_price,
            min_capacity=min_capacity,
            max_capacity=max_capacity,
            sort_order=sort_order,
            offset=(page - 1) * page_size,
            limit=page_size,
        )

        vendor_ids = [vendor.id for vendor, _ in rows]
        review_counts = self.repo.get_review_counts(self.db, vendor_ids)
        favorited = self.repo.get_favorited_ids(self.db, user.id, vendor_ids) if user else set()

        logger.debug(f"🔍 Vendor search type={vendor_type} city={city} -> {total} results")

        return VendorSearchResponse(
            vendors=[
                vendor_summary(
                    vendor,
                    starting_price=price,
                    review_count=review_counts.get(vendor.id, 0),
                    is_favorited=vendor.id in favorited,
                )
                for vendor, price in rows
            ],
            total=total,
            page=page,
            pageSize=page_size,
            filterSchema=get_filter_inputs(vendor_type),
        )

    def get_vendor(self, slug: str, user: Optional[User]) -> VendorDetailResponse:
        vendor = self.repo.get_vendor_by_slug(self.db, slug)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor not found")

        review_count = self.repo.get_review_counts(self.db, [vendor.id]).get(vendor.id, 0)
        is_favorited = bool(user) and vendor.id in self.repo.get_favorited_ids(
            self.db, user.id, [vendor.id]
        )
        summary = vendor_summary(
            vendor,
            starting_price=self.repo.get_starting_price(self.db, vendor.id),
            review_count=review_count,
            is_favorited=is_favorited,
        )

        return VendorDetailResponse(
            **summary.model_dump(),
            description=vendor.description,
            phone=vendor.phone,
            website=vendor.website,
            socialLinks=[SocialLink(**link) for link in (vendor.social_links or [])],
            latitude=vendor.latitude,
            longitude=vendor.longitude,
            ownerUsername=vendor.owner.username,
            gallery=[image_response(image) for image in vendor.gallery],
            packages=[
                PackageResponse(id=p.id, title=p.title, description=p.description, price=p.price)
                for p in vendor.packages
            ],
            venueDetails=venue_details_response(vendor.venue_details) if vendor.venue_details else None,
            extraDetails=vendor.extra_details,
            isOwner=bool(user) and vendor.owner_id == user.id,
            created_at=vendor.created_at,
        )

    def get_categories(self):
        return self.repo.get_vendor_types(self.db)

    @staticmethod
    def get_vendor_type_catalog() -> list[dict]:
        return VENDOR_TYPES

    @staticmethod
    def get_filter_schema(vendor_type: Optional[str]) -> list[dict]:
        return get_filter_inputs(vendor_type)

    def suggest_locations(self, query: Optional[str]) -> LocationSuggestions:
        query = (query or "").strip()
        if not query:
            return LocationSuggestions(cities=[], addresses=[])
        cities, addresses = self.repo.search_locations(self.db, query)
        return LocationSuggestions(cities=cities, addresses=addresses)

    @staticmethod
    def get_divisions() -> list[str]:
        return get_divisions()

    @staticmethod
    def get_districts(division: str) -> list[str]:
        districts = get_districts_for_division(division)
        if not districts:
            raise HTTPException(status_code=404, detail=f"Unknown division: {division}")
        return districts

    @staticmethod
    def get_thanas(district: str) -> list[str]:
        return get_thanas_for_district(district)
