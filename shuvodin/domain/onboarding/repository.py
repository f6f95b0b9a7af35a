"""Onboarding repository - Database operations for the vendor wizard"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import (
    GlobalVenueAmenity,
    GlobalVenueEventType,
    GlobalVenueService,
    GlobalVenueSpace,
    Package,
    Role,
    User,
    Vendor,
    VendorImage,
    VendorType,
    VenueAmenity,
    VenueDetails,
    VenueEventType,
    VenueService,
    VenueSpace,
    VenueType,
)


class OnboardingRepository:
    """Repository for vendor onboarding database operations"""

    @staticmethod
    def get_vendor_for_owner(db: Session, owner_id: int) -> Optional[Vendor]:
        return db.query(Vendor).filter(Vendor.owner_id == owner_id).first()

    @staticmethod
    def get_vendor_type(db: Session, vendor_type_id: int) -> Optional[VendorType]:
        return db.query(VendorType).filter(VendorType.id == vendor_type_id).first()

    @staticmethod
    def get_vendor_types(db: Session) -> list[VendorType]:
        return db.query(VendorType).order_by(VendorType.name.asc()).all()

    @staticmethod
    def create_vendor(db: Session, owner: User, **vendor_data) -> Vendor:
        """Create the vendor and grant its owner the ``vendor`` role in one commit"""
        vendor = Vendor(owner_id=owner.id, **vendor_data)
        db.add(vendor)

        role = db.query(Role).filter(Role.name == "vendor").first()
        if role is None:
            role = Role(name="vendor")
            db.add(role)
        if role not in owner.roles:
            owner.roles.append(role)

        db.commit()
        db.refresh(vendor)
        return vendor

    @staticmethod
    def update_vendor(db: Session, vendor: Vendor, **updates) -> Vendor:
        """Apply updates as given; None clears a nullable column"""
        for key, value in updates.items():
            setattr(vendor, key, value)
        db.commit()
        db.refresh(vendor)
        return vendor

    # ==================== Gallery ====================

    @staticmethod
    def replace_gallery(
        db: Session,
        vendor: Vendor,
        updates: list[dict],
        new_images: list[dict],
    ) -> list[VendorImage]:
        """Delete images not in ``updates``, update the rest, then append ``new_images``"""
        keep_ids = {u["id"] for u in updates}
        by_id = {image.id: image for image in vendor.gallery}

        for image in list(vendor.gallery):
            if image.id not in keep_ids:
                vendor.gallery.remove(image)

        for update in updates:
            image = by_id[update["id"]]
            image.alt_text = update.get("alt_text")
            if update.get("object_key"):
                image.object_key = update["object_key"]

        for new_image in new_images:
            vendor.gallery.append(VendorImage(**new_image))

        db.commit()
        db.refresh(vendor)
        return vendor.gallery

    # ==================== Venue catalog ====================

    @staticmethod
    def get_existing_ids(db: Session, model, ids: list[int]) -> set[int]:
        if not ids:
            return set()
        return {row.id for row in db.query(model.id).filter(model.id.in_(ids))}

    @staticmethod
    def get_venue_options(db: Session) -> dict:
        return {
            "venueTypes": db.query(VenueType).order_by(VenueType.name).all(),
            "services": db.query(GlobalVenueService).order_by(GlobalVenueService.name).all(),
            "spaces": db.query(GlobalVenueSpace).order_by(GlobalVenueSpace.name).all(),
            "amenities": db.query(GlobalVenueAmenity).order_by(GlobalVenueAmenity.name).all(),
            "eventTypes": db.query(GlobalVenueEventType).order_by(GlobalVenueEventType.name).all(),
        }

    @staticmethod
    def upsert_venue_details(
        db: Session,
        vendor: Vendor,
        venue_type_id: int,
        services: list[dict],
        spaces: list[dict],
        event_types: list[int],
        amenities: Optional[list[int]],
    ) -> VenueDetails:
        """
        Create the venue details or replace every child collection.

        ``amenities=None`` keeps the current amenities; an empty list clears them.
        """
        details = vendor.venue_details
        if details is None:
            details = VenueDetails(venue_type_id=venue_type_id)
            vendor.venue_details = details
        else:
            details.venue_type_id = venue_type_id

        details.services = [VenueService(**s) for s in services]
        details.spaces = [VenueSpace(**s) for s in spaces]
        details.event_types = [VenueEventType(global_event_type_id=i) for i in event_types]
        if amenities is not None:
            details.amenities = [VenueAmenity(global_amenity_id=i) for i in amenities]

        db.commit()
        db.refresh(details)
        return details

    # ==================== Packages ====================

    @staticmethod
    def create_package(db: Session, vendor: Vendor, **package_data) -> Package:
        package = Package(vendor_id=vendor.id, **package_data)
        db.add(package)
        db.commit()
        db.refresh(package)
        return package

    @staticmethod
    def get_package(db: Session, vendor: Vendor, package_id: int) -> Optional[Package]:
        return (
            db.query(Package)
            .filter(Package.id == package_id, Package.vendor_id == vendor.id)
            .first()
        )

    @staticmethod
    def delete_package(db: Session, package: Package) -> None:
        db.delete(package)
        db.commit()
