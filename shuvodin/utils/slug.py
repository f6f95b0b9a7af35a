import re

from sqlalchemy.orm import Session

from ..models import Vendor

# Fixed path segments under /vendors/ that a vendor page would be shadowed by
RESERVED_SLUGS = frozenset({"bookings", "categories", "filters", "locations", "onboarding", "types"})


def slugify(name: str) -> str:
    """'Studio by Fariha Borsha!' -> 'studio-by-fariha-borsha'"""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def generate_slug(db: Session, name: str) -> str:
    """
    Unique vendor slug for ``name``.

    When the plain slug is taken the lowest free numeric suffix is used,
    so with ``studio`` and ``studio-1`` taken the next one is ``studio-2``.
    """
    primary = slugify(name) or "vendor"

    taken = {
        slug
        for (slug,) in db.query(Vendor.slug).filter(Vendor.slug.startswith(primary, autoescape=True))
    } | RESERVED_SLUGS
    if primary not in taken:
        return primary

    suffix = 1
    while f"{primary}-{suffix}" in taken:
        suffix += 1
    return f"{primary}-{suffix}"
