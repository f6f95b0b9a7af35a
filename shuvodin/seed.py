"""
Seed the lookup tables onboarding depends on.

Safe to run repeatedly: rows are matched by name (or slug) and only missing
ones are inserted.

    python -m shuvodin.seed
"""

import logging

from sqlalchemy.orm import Session

from .catalog import (
    ROLE_NAMES,
    VENDOR_TYPES,
    VENUE_AMENITY_NAMES,
    VENUE_EVENT_TYPE_NAMES,
    VENUE_SERVICES,
    VENUE_SPACE_NAMES,
    VENUE_TYPE_NAMES,
    get_service_description,
)
from .database import Base, SessionLocal, engine
from .models import (
    GlobalVenueAmenity,
    GlobalVenueEventType,
    GlobalVenueService,
    GlobalVenueSpace,
    Role,
    VendorType,
    VenueType,
)

logger = logging.getLogger(__name__)


def _insert_missing_names(db: Session, model, names: list[str]) -> int:
    existing = {name for (name,) in db.query(model.name)}
    missing = [name for name in names if name not in existing]
    db.add_all(model(name=name) for name in missing)
    return len(missing)


def seed_database(db: Session) -> dict[str, int]:
    """Insert missing roles, vendor types and venue catalogs; returns rows added per table"""
    added = {
        "roles": _insert_missing_names(db, Role, ROLE_NAMES),
        "venue_types": _insert_missing_names(db, VenueType, VENUE_TYPE_NAMES),
        "venue_spaces": _insert_missing_names(db, GlobalVenueSpace, VENUE_SPACE_NAMES),
        "venue_event_types": _insert_missing_names(db, GlobalVenueEventType, VENUE_EVENT_TYPE_NAMES),
        "venue_amenities": _insert_missing_names(db, GlobalVenueAmenity, VENUE_AMENITY_NAMES),
    }

    existing_slugs = {slug for (slug,) in db.query(VendorType.slug)}
    new_types = [t for t in VENDOR_TYPES if t["slug"] not in existing_slugs]
    db.add_all(VendorType(name=t["title"], slug=t["slug"], icon=t["icon"]) for t in new_types)
    added["vendor_types"] = len(new_types)

    existing_services = {name for (name,) in db.query(GlobalVenueService.name)}
    new_services = [s["name"] for s in VENUE_SERVICES if s["name"] not in existing_services]
    db.add_all(
        GlobalVenueService(name=name, description=get_service_description(name)) for name in new_services
    )
    added["venue_services"] = len(new_services)

    db.commit()
    logger.info(f"🌱 Seed complete: {added}")
    return added


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
