"""Vendor router - public browse, search and vendor page endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_optional_user
from ...database import get_db
from ...models import User
from .schemas import LocationSuggestions, VendorDetailResponse, VendorSearchResponse, VendorTypeResponse
from .service import VendorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vendors", tags=["Vendors"])
locations_router = APIRouter(prefix="/locations", tags=["Locations"])


def get_vendor_service(db: Session = Depends(get_db)) -> VendorService:
    """Dependency injection for VendorService"""
    return VendorService(db)


@router.get("", response_model=VendorSearchResponse)
async def search_vendors(
    vendorType: Optional[str] = Query(None),
    query: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    address: Optional[str] = Query(None),
    minPrice: Optional[float] = Query(None, ge=0),
    maxPrice: Optional[float] = Query(None, ge=0),
    minCapacity: Optional[int] = Query(None, ge=0),
    maxCapacity: Optional[int] = Query(None, ge=0),
    capacity: list[str] = Query([]),
    sortOrder: str = Query("relevance"),
    page: int = Query(1, ge=1),
    pageSize: int = Query(20, ge=1, le=100),
    current_user: Optional[User] = Depends(get_optional_user),
    service: VendorService = Depends(get_vendor_service),
):
    """Browse vendors with type, location, price and capacity filters"""
    return service.search(
        current_user,
        vendor_type=vendorType,
        query=query,
        city=city,
        address=address,
        min_price=minPrice,
        max_price=maxPrice,
        min_capacity=minCapacity,
        max_capacity=maxCapacity,
        capacity=capacity,
        sort_order=sortOrder,
        page=page,
        page_size=pageSize,
    )


@router.get("/types")
async def get_vendor_types(service: VendorService = Depends(get_vendor_service)):
    """Static vendor type catalog (icon, title, color, slug)"""
    return service.get_vendor_type_catalog()


@router.get("/categories", response_model=list[VendorTypeResponse])
async def get_categories(service: VendorService = Depends(get_vendor_service)):
    return service.get_categories()


@router.get("/filters")
async def get_filters(
    vendorType: Optional[str] = Query(None),
    service: VendorService = Depends(get_vendor_service),
):
    return service.get_filter_schema(vendorType)


@router.get("/locations", response_model=LocationSuggestions)
async def suggest_locations(
    query: Optional[str] = Query(None),
    service: VendorService = Depends(get_vendor_service),
):
    """Location combobox suggestions"""
    return service.suggest_locations(query)


@router.get("/{slug}", response_model=VendorDetailResponse)
async def get_vendor(
    slug: str,
    current_user: Optional[User] = Depends(get_optional_user),
    service: VendorService = Depends(get_vendor_service),
):
    return service.get_vendor(slug, current_user)


# ============================================================================
# LOCATIONS
# ============================================================================


@locations_router.get("/divisions", response_model=list[str])
async def get_divisions():
    return VendorService.get_divisions()


@locations_router.get("/districts", response_model=list[str])
async def get_districts(division: str = Query(...)):
    return VendorService.get_districts(division)


@locations_router.get("/thanas", response_model=list[str])
async def get_thanas(district: str = Query(...)):
    return VendorService.get_thanas(district)
