"""Onboarding router - the vendor setup wizard and vendor-side settings"""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_vendor
from ...database import get_db
from ...models import User, Vendor
from ..vendors.schemas import PackageResponse
from .schemas import (
    BookingSettingsRequest,
    GalleryRequest,
    GeneralInfoRequest,
    LinksRequest,
    OnboardingStatusResponse,
    PackageCreate,
    VendorDetailsRequest,
)
from .service import OnboardingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vendors/onboarding", tags=["Vendor Onboarding"])


def get_onboarding_service(db: Session = Depends(get_db)) -> OnboardingService:
    """Dependency injection for OnboardingService"""
    return OnboardingService(db)


@router.get("", response_model=OnboardingStatusResponse)
async def get_onboarding_status(
    current_user: User = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Wizard steps with their completion flags and the next step to show"""
    return service.get_status(current_user)


# ==================== Step 1: General ====================


@router.get("/general")
async def get_general_info(
    current_user: User = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
):
    return service.get_general(current_user)


@router.put("/general")
async def save_general_info(
    data: GeneralInfoRequest,
    current_user: User = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
):
    """Create the vendor profile, or update it if the user already has one"""
    return service.save_general(current_user, data)


# ==================== Step 2: Gallery ====================


@router.get("/gallery")
async def get_gallery(
    vendor: Vendor = Depends(require_vendor),
    service: OnboardingService = Depends(get_onboarding_service),
):
    return service.get_gallery(vendor)


@router.put("/gallery")
async def save_gallery(
    data: GalleryRequest,
    vendor: Vendor = Depends(require_vendor),
    service: OnboardingService = Depends(get_onboarding_service),
):
    return service.save_gallery(vendor, data)


# ==================== Step 3: Services and amenities ====================


@router.get("/details")
async def get_details(
    vendor: Vendor = Depends(require_vendor),
    service: OnboardingService = Depends(get_onboarding_service),
):
    return service.get_details(vendor)


@router.put("/details")
async def save_details(
    data: Annotated[VendorDetailsRequest, Body(discriminator="vendorType")],
    vendor: Vendor = Depends(require_vendor),
    service: OnboardingService = Depends(get_onboarding_service),
):
    return service.save_details(vendor, data)


# ==================== Step 4: Links ====================


@router.get("/links")
async def get_links(
    vendor: Vendor = Depends(require_vendor),
    service: OnboardingService = Depends(get_onboarding_service),
):
    return service.get_links(vendor)


@router.put("/links")
async def save_links(
    data: LinksRequest,
    vendor: Vendor = Depends(require_vendor),
    service: OnboardingService = Depends(get_onboarding_service),
):
    return service.save_links(vendor, data)


# ==================== Booking settings & packages ====================


@router.patch("/settings")
async def update_booking_settings(
    data: BookingSettingsRequest,
    vendor: Vendor = Depends(require_vendor),
    service: OnboardingService = Depends(get_onboarding_service),
):
    return service.update_settings(vendor, data)


@router.post("/packages", response_model=PackageResponse, status_code=201)
async def add_package(
    data: PackageCreate,
    vendor: Vendor = Depends(require_vendor),
    service: OnboardingService = Depends(get_onboarding_service),
):
    package = service.add_package(vendor, data)
    return PackageResponse(
        id=package.id, title=package.title, description=package.description, price=package.price
    )


@router.delete("/packages/{package_id}")
async def delete_package(
    package_id: int,
    vendor: Vendor = Depends(require_vendor),
    service: OnboardingService = Depends(get_onboarding_service),
):
    return service.delete_package(vendor, package_id)
