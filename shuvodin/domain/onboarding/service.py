"""Onboarding service - Business logic for the four-step vendor wizard"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...catalog import DETAILS_KIND_BY_VENDOR_TYPE
from ...locations import validate_location
from ...models import (
    GlobalVenueAmenity,
    GlobalVenueEventType,
    GlobalVenueService,
    GlobalVenueSpace,
    User,
    Vendor,
    VenueType,
)
from ...security_utils import strip_html
from ...utils.slug import generate_slug
from ..vendors.service import image_response, venue_details_response
from .repository import OnboardingRepository
from .schemas import (
    BookingSettingsRequest,
    GalleryRequest,
    GeneralInfoRequest,
    LinksRequest,
    MakeupArtistDetailsRequest,
    OnboardingStatusResponse,
    OnboardingStep,
    PackageCreate,
    VenueDetailsRequest,
)

logger = logging.getLogger(__name__)

ONBOARDING_STEPS = [
    {
        "key": "general",
        "title": "General",
        "path": "/vendors/onboarding/general",
        "description": "Update your Vendor details",
    },
    {
        "key": "gallery",
        "title": "Gallery",
        "path": "/vendors/onboarding/gallery",
        "description": "Manage your vendor images",
    },
    {
        "key": "details",
        "title": "Services and Amenities",
        "path": "/vendors/onboarding/details",
        "description": "Set up your services and amenities",
    },
    {
        "key": "links",
        "title": "Links and Others",
        "path": "/vendors/onboarding/links",
        "description": "Add your social and other information",
    },
]


def details_kind(vendor: Vendor) -> Optional[str]:
    """'venue', 'makeup-artist' or None when the vendor type has no details form"""
    return DETAILS_KIND_BY_VENDOR_TYPE.get(vendor.vendor_type.slug)


class OnboardingService:
    """Service layer for vendor onboarding"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = OnboardingRepository()

    def get_vendor(self, user: User) -> Vendor:
        vendor = self.repo.get_vendor_for_owner(self.db, user.id)
        if not vendor:
            raise HTTPException(status_code=404, detail="Vendor not found")
        return vendor

    # ==================== Status ====================

    def get_status(self, user: User) -> OnboardingStatusResponse:
        vendor = self.repo.get_vendor_for_owner(self.db, user.id)
        completed = {
            "general": vendor is not None,
            "gallery": bool(vendor and vendor.gallery),
            "details": bool(vendor) and self._details_completed(vendor),
            "links": bool(vendor and (vendor.website or vendor.social_links or vendor.phone)),
        }
        steps = [OnboardingStep(**step, completed=completed[step["key"]]) for step in ONBOARDING_STEPS]
        next_step = next((step.key for step in steps if not step.completed), None)
        return OnboardingStatusResponse(
            steps=steps, nextStep=next_step, vendorSlug=vendor.slug if vendor else None
        )

    @staticmethod
    def _details_completed(vendor: Vendor) -> bool:
        kind = details_kind(vendor)
        if kind == "venue":
            return vendor.venue_details is not None
        if kind == "makeup-artist":
            return bool(vendor.extra_details)
        return True

    # ==================== General ====================

    def get_general(self, user: User) -> dict:
        vendor = self.repo.get_vendor_for_owner(self.db, user.id)
        return {
            "vendorTypes": [{"id": t.id, "name": t.name} for t in self.repo.get_vendor_types(self.db)],
            "vendor": self._general_payload(vendor) if vendor else None,
        }

    @staticmethod
    def _general_payload(vendor: Vendor) -> dict:
        return {
            "id": vendor.id,
            "slug": vendor.slug,
            "businessName": vendor.business_name,
            "vendorTypeId": vendor.vendor_type_id,
            "division": vendor.division,
            "district": vendor.district,
            "thana": vendor.thana,
            "address": vendor.address,
            "description": vendor.description,
        }

    def save_general(self, user: User, data: GeneralInfoRequest) -> dict:
        """Create the vendor on first submission, update it afterwards (the slug never changes)"""
        if not self.repo.get_vendor_type(self.db, data.vendorTypeId):
            raise HTTPException(status_code=400, detail="Select a valid vendor type")

        location_error = validate_location(data.division, data.district, data.thana)
        if location_error:
            raise HTTPException(status_code=400, detail=location_error)

        fields = {
            "business_name": data.businessName,
            "vendor_type_id": data.vendorTypeId,
            "division": data.division,
            "district": data.district,
            "thana": data.thana,
            "address": data.address.strip() if data.address else None,
            "description": strip_html(data.description),
        }

        vendor = self.repo.get_vendor_for_owner(self.db, user.id)
        if vendor is None:
            fields["slug"] = generate_slug(self.db, data.businessName)
            vendor = self.repo.create_vendor(self.db, user, **fields)
            logger.info(f"🏪 Vendor '{vendor.slug}' created by user {user.id}")
        else:
            vendor = self.repo.update_vendor(self.db, vendor, **fields)
            logger.info(f"✏️ Vendor '{vendor.slug}' general info updated")

        return {"vendor": self._general_payload(vendor), "nextStep": "gallery"}

    # ==================== Gallery ====================

    def get_gallery(self, vendor: Vendor) -> dict:
        return {"images": [image_response(image) for image in vendor.gallery]}

    def save_gallery(self, vendor: Vendor, data: GalleryRequest) -> dict:
        existing_ids = {image.id for image in vendor.gallery}
        unknown = [img.id for img in data.images if img.id is not None and img.id not in existing_ids]
        if unknown:
            raise HTTPException(
                status_code=400, detail=f"Unknown image IDs: {', '.join(map(str, unknown))}"
            )

        updates = [
            {"id": img.id, "alt_text": img.altText, "object_key": img.objectKey}
            for img in data.images
            if img.id is not None
        ]
        new_images = [
            {"object_key": img.objectKey, "alt_text": img.altText}
            for img in data.images
            if img.id is None and img.objectKey
        ]

        gallery = self.repo.replace_gallery(self.db, vendor, updates, new_images)
        logger.info(
            f"🖼️ Gallery saved for vendor {vendor.id}: {len(updates)} kept, {len(new_images)} added"
        )
        return {"images": [image_response(image) for image in gallery], "nextStep": "details"}

    # ==================== Details ====================

    def get_details(self, vendor: Vendor) -> dict:
        kind = details_kind(vendor)
        response = {"vendorType": kind, "details": None, "options": None}

        if kind == "venue":
            options = self.repo.get_venue_options(self.db)
            response["options"] = {
                key: [
                    {"id": item.id, "name": item.name, "description": getattr(item, "description", None)}
                    for item in items
                ]
                for key, items in options.items()
            }
            if vendor.venue_details:
                response["details"] = venue_details_response(vendor.venue_details).model_dump()
        elif kind == "makeup-artist":
            response["details"] = vendor.extra_details

        return response

    def save_details(self, vendor: Vendor, data) -> dict:
        kind = details_kind(vendor)
        if kind is None:
            raise HTTPException(status_code=400, detail="Details are not available for this vendor type")
        if data.vendorType != kind:
            raise HTTPException(status_code=400, detail="Invalid vendor type")

        if isinstance(data, VenueDetailsRequest):
            self._save_venue_details(vendor, data)
        elif isinstance(data, MakeupArtistDetailsRequest):
            self.repo.update_vendor(self.db, vendor, extra_details=data.details.model_dump())

        logger.info(f"🧾 {kind} details saved for vendor {vendor.id}")
        result = self.get_details(vendor)
        result["nextStep"] = "links"
        return result

    def _save_venue_details(self, vendor: Vendor, data: VenueDetailsRequest) -> None:
        checks = [
            ("venue type", VenueType, [data.venueTypeId]),
            ("service", GlobalVenueService, [s.globalServiceId for s in data.services]),
            ("space", GlobalVenueSpace, [s.globalSpaceId for s in data.spaces]),
            ("event type", GlobalVenueEventType, [e.globalEventTypeId for e in data.eventTypes]),
            ("amenity", GlobalVenueAmenity, [a.globalAmenityId for a in data.amenities or []]),
        ]
        errors = []
        for label, model, ids in checks:
            valid = self.repo.get_existing_ids(self.db, model, ids)
            invalid = [str(i) for i in ids if i not in valid]
            if invalid:
                errors.append(f"Invalid {label} IDs: {', '.join(invalid)}")
        if errors:
            raise HTTPException(status_code=400, detail=errors)

        self.repo.upsert_venue_details(
            self.db,
            vendor,
            venue_type_id=data.venueTypeId,
            services=[
                {
                    "global_service_id": s.globalServiceId,
                    "price": s.price,
                    "description": strip_html(s.description),
                }
                for s in data.services
            ],
            spaces=[
                {
                    "global_space_id": s.globalSpaceId,
                    "price": s.price,
                    "description": strip_html(s.description),
                    "sitting_capacity": s.sittingCapacity or 0,
                    "standing_capacity": s.standingCapacity or 0,
                    "parking_capacity": s.parkingCapacity or 0,
                }
                for s in data.spaces
            ],
            event_types=[e.globalEventTypeId for e in data.eventTypes],
            amenities=[a.globalAmenityId for a in data.amenities] if data.amenities is not None else None,
        )

    # ==================== Links ====================

    @staticmethod
    def get_links(vendor: Vendor) -> dict:
        return {
            "website": vendor.website,
            "phone": vendor.phone,
            "socialLinks": vendor.social_links or [],
            "latitude": vendor.latitude,
            "longitude": vendor.longitude,
        }

    def save_links(self, vendor: Vendor, data: LinksRequest) -> dict:
        vendor = self.repo.update_vendor(
            self.db,
            vendor,
            website=data.website,
            phone=data.phone,
            social_links=[link.model_dump() for link in data.socialLinks],
            latitude=data.latitude,
            longitude=data.longitude,
        )
        logger.info(f"🔗 Links updated for vendor {vendor.id}")
        return {
            "message": "Your Vendor profile has been successfully updated.",
            "slug": vendor.slug,
            **self.get_links(vendor),
        }

    # ==================== Settings & packages ====================

    def update_settings(self, vendor: Vendor, data: BookingSettingsRequest) -> dict:
        vendor = self.repo.update_vendor(self.db, vendor, daily_booking_limit=data.dailyBookingLimit)
        return {"dailyBookingLimit": vendor.daily_booking_limit}

    def add_package(self, vendor: Vendor, data: PackageCreate):
        return self.repo.create_package(
            self.db,
            vendor,
            title=data.title.strip(),
            description=strip_html(data.description),
            price=data.price,
        )

    def delete_package(self, vendor: Vendor, package_id: int) -> dict:
        package = self.repo.get_package(self.db, vendor, package_id)
        if not package:
            raise HTTPException(status_code=404, detail="Package not found")
        self.repo.delete_package(self.db, package)
        return {"message": "Package deleted"}
