"""Search filter schemas rendered by the vendor browse page"""

from typing import Optional


def _checkbox(name: str, label: str, description: Optional[str] = None) -> dict:
    item = {"name": name, "type": "checkbox", "label": label}
    if description:
        item["description"] = description
    return item


PRICE_FILTERS = [
    {
        "title": "Price",
        "value": "price",
        "inputs": [
            {"name": "minPrice", "type": "number", "placeholder": "Enter minimum price", "label": "Minimum price"},
            {"name": "maxPrice", "type": "number", "placeholder": "Enter maximum price", "label": "Maximum price"},
        ],
    }
]

AWARD_FILTERS = [
    {
        "title": "Award winners",
        "value": "award-winners",
        "inputs": [
            _checkbox("all-best-of-shuvodin-winners", "All Best of ShuvoDin Winners"),
            _checkbox("best-of-shuvodin-2025-winners", "Best of ShuvoDin 2025 Winners"),
        ],
    }
]

PHOTOGRAPHY_FILTERS = PRICE_FILTERS + [
    {
        "title": "Location and Fees",
        "value": "location-fees",
        "inputs": [
            _checkbox(
                "based-in-city",
                "Based in City",
                "Based in the wedding location itself, these photographers might know all the best local spots.",
            ),
            _checkbox("serves-this-city", "Serves this city", "Not local but serves your location at no extra cost."),
            _checkbox(
                "serves-this-city-for-additional-fees",
                "Serves this city for additional fees",
                "Not local but serves your location with additional travel fees.",
            ),
        ],
    },
    {
        "title": "Photography Style",
        "value": "style",
        "inputs": [
            _checkbox("classic", "Classic"),
            _checkbox("editorial", "Editorial"),
            _checkbox("fineArt", "Fine Art"),
            _checkbox("photojournalistic", "Photojournalistic"),
        ],
    },
    {
        "title": "Services",
        "value": "services",
        "inputs": [
            _checkbox("bride-only-session", "Bride-only session"),
            _checkbox("drone-photography", "Drone photography"),
            _checkbox("engagement-session", "Engagement session"),
            _checkbox("extra-hours", "Extra hours"),
            _checkbox("image-editing", "Image editing"),
            _checkbox("online-proofing", "Online proofing"),
            _checkbox("printing-rights", "Printing rights"),
            _checkbox("same-day-edits", "Same-day edits"),
            _checkbox("second-photographer", "Second photographer"),
        ],
    },
    *AWARD_FILTERS,
    {
        "title": "Photo format",
        "value": "photo-format",
        "inputs": [
            _checkbox(
                "digital-only",
                "Digital only",
                "Photographers who only provide digital files in a memory card or online gallery.",
            ),
            _checkbox("film", "Film", "Photographers who shoot on film and provide developed prints."),
            _checkbox(
                "hybrid",
                "Hybrid",
                "Photographers who shoot both digital and film, providing a mix of both formats.",
            ),
        ],
    },
    {
        "title": "What you'll get",
        "value": "what-you-get",
        "inputs": [
            _checkbox("digital-files", "Digital files"),
            _checkbox("digital-rights", "Digital rights"),
            _checkbox("online-gallery", "Online gallery"),
            _checkbox("photo-box", "Photo box"),
            _checkbox("printed-enlargements", "Printed enlargements"),
            _checkbox("sneak-peek-images", "Same/next-day sneak-peek images"),
            _checkbox("slideshow", "Slideshow"),
            _checkbox("video", "Video"),
            _checkbox("wedding-album", "Wedding album"),
        ],
    },
]

# Ordered as the chips appear in the sidebar
CAPACITY_RANGES = ["up-to-50", "50-100", "100-150", "150-200", "200-250", "250-300", "300+"]

VENUE_FILTERS = PRICE_FILTERS + [
    {
        "title": "Capacity",
        "value": "capacity",
        "inputs": [
            _checkbox(name, "Up to 50" if name == "up-to-50" else name) for name in CAPACITY_RANGES
        ],
    },
    {
        "title": "Indoor/Outdoor",
        "value": "indoor-outdoor",
        "inputs": [
            _checkbox("indoor", "Indoor"),
            _checkbox(
                "outdoor",
                "Outdoor",
                "Not covered, but can often accommodate temporary options like tents and canopies.",
            ),
            _checkbox("outdoor-covered", "Covered outdoor"),
        ],
    },
    {
        "title": "Venue Type",
        "value": "venue-type",
        "inputs": [
            _checkbox("convention-halls", "Convention Halls"),
            _checkbox("community-centers", "Community Centers"),
            _checkbox("hotel-ballrooms", "Hotel Ballrooms"),
            _checkbox("resorts", "Resorts"),
            _checkbox("rooftop", "Rooftop"),
            _checkbox("garden-lawn", "Garden/Lawn Venue"),
        ],
    },
    {
        "title": "Included",
        "value": "included",
        "inputs": [
            _checkbox(
                "all-inclusive",
                "All-inclusive",
                "The venue takes care of it all - food and beverage, rentals, the works!",
            ),
            _checkbox(
                "raw-space",
                "Raw space",
                "The venue will provide just the space. You'll bring in your own caterer and vendors.",
            ),
            _checkbox(
                "select-services",
                "Select services",
                "The venue will provide the space, plus a few extras. Check the venue for specifics.",
            ),
        ],
    },
    *AWARD_FILTERS,
    {
        "title": "Amenities",
        "value": "amenities",
        "inputs": [
            _checkbox("catering-services", "Catering services"),
            _checkbox("service-staff", "Service staff", "Waiters, servers, and cleanup crew"),
            _checkbox(
                "event-coordinator",
                "Event coordinator",
                "Helps with timeline, vendor coordination, and troubleshooting",
            ),
            _checkbox("bridal-suite", "Bridal suite"),
            _checkbox("dance-floor", "Dance floor"),
            _checkbox("lighting", "Lighting and sound system"),
            _checkbox("event-rentals", "Event rentals", "Chairs, tables, décor, stage setup etc."),
            _checkbox("parking", "Parking", "On-site or nearby parking for guests"),
            _checkbox("wifi", "Wi-Fi"),
        ],
    },
    {
        "title": "Event Types",
        "value": "event-types",
        "inputs": [
            _checkbox("wedding-ceremony", "Wedding ceremony"),
            _checkbox("reception", "Reception"),
            _checkbox("rehearsal-dinner", "Rehearsal dinner"),
            _checkbox("wedding-shower", "Wedding shower"),
            _checkbox("engagement-party", "Engagement party"),
            _checkbox("birthday-party", "Birthday party"),
            _checkbox("other", "Other", "Leave a note in the booking form"),
        ],
    },
]


def get_filter_inputs(vendor_type: Optional[str]) -> list[dict]:
    """Filter groups for a vendor type slug; unknown types only get the price range"""
    vendor_type = (vendor_type or "").lower()
    if vendor_type == "photography":
        return PHOTOGRAPHY_FILTERS
    if vendor_type == "venues":
        return VENUE_FILTERS
    return PRICE_FILTERS


def capacity_bounds(ranges: list[str]) -> tuple[Optional[int], Optional[int]]:
    """
    Collapse checked capacity chips into a (min, max) pair.

    ``up-to-50`` is (0, 50), ``a-b`` is (a, b) and ``300+`` is (300, None).
    Several chips widen to the smallest min and largest max; ``300+``
    removes the upper bound and pins the minimum to 300.

    Raises:
        ValueError: for a chip name that is not a capacity range
    """
    if not ranges:
        return None, None

    bounds = []
    for name in ranges:
        if name == "300+":
            bounds.append((300, None))
        elif name == "up-to-50":
            bounds.append((0, 50))
        else:
            low, sep, high = name.partition("-")
            if not sep or not low.isdigit() or not high.isdigit():
                raise ValueError(f"Unknown capacity range: {name}")
            bounds.append((int(low), int(high)))

    if any(high is None for _, high in bounds):
        return 300, None
    return min(low for low, _ in bounds), max(high for _, high in bounds)
