from shuvodin.catalog import VENDOR_TYPES, VENUE_SERVICES
from shuvodin.models import GlobalVenueService, Role, VendorType
from shuvodin.seed import seed_database


def test_seed_is_idempotent(db):
    # The db fixture has already seeded once
    added = seed_database(db)

    assert set(added.values()) == {0}
    assert db.query(VendorType).count() == len(VENDOR_TYPES)
    assert {r.name for r in db.query(Role)} == {"user", "vendor", "admin"}


def test_services_carry_descriptions(db):
    services = {s.name: s.description for s in db.query(GlobalVenueService)}
    assert len(services) == len(VENUE_SERVICES)
    assert services["Music/DJ"].startswith("Professional DJ")


def test_missing_rows_are_backfilled(db):
    db.query(VendorType).filter(VendorType.slug == "venues").delete()
    db.commit()

    assert seed_database(db)["vendor_types"] == 1
    assert db.query(VendorType).filter(VendorType.slug == "venues").one().name == "Venues"
