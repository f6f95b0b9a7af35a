"""Static marketplace catalogs: vendor types and the venue option lists seeded into the database"""

# Slugs double as the ``vendorType`` search parameter
VENDOR_TYPES = [
    {"icon": "camera", "title": "Photography", "color": "bg-blue-50 text-blue-600", "slug": "photography"},
    {"icon": "building-2", "title": "Venues", "color": "bg-purple-50 text-purple-600", "slug": "venues"},
    {"icon": "utensils", "title": "Catering", "color": "bg-green-50 text-green-600", "slug": "catering"},
    {"icon": "palette", "title": "Decoration", "color": "bg-pink-50 text-pink-600", "slug": "decoration"},
    {"icon": "users", "title": "Event Planning", "color": "bg-orange-50 text-orange-600", "slug": "event-planning"},
    {"icon": "music", "title": "Entertainment", "color": "bg-indigo-50 text-indigo-600", "slug": "entertainment"},
    {"icon": "car", "title": "Transportation", "color": "bg-red-50 text-red-600", "slug": "transportation"},
    {"icon": "flower-2", "title": "Floristry", "color": "bg-emerald-50 text-emerald-600", "slug": "flowers"},
    {"icon": "cake", "title": "Wedding Cakes", "color": "bg-yellow-50 text-yellow-600", "slug": "cakes"},
    {"icon": "shirt", "title": "Bridal Wear", "color": "bg-teal-50 text-teal-600", "slug": "wearings"},
    {"icon": "brush", "title": "Makeup Artists", "color": "bg-rose-50 text-rose-600", "slug": "makeup-artists"},
]

# Vendor type slug -> kind of details form used in onboarding
DETAILS_KIND_BY_VENDOR_TYPE = {
    "venues": "venue",
    "makeup-artists": "makeup-artist",
}

VENUE_TYPE_NAMES = [
    "Convention Hall",
    "Community Center",
    "Hotel Ballroom",
    "Resort",
    "Rooftop",
    "Garden/Lawn",
]

VENUE_SPACE_NAMES = [
    "Indoor",
    "Outdoor",
    "Rooftop",
    "Garden",
    "Ballroom",
    "Conference Room",
    "Banquet Hall",
    "Terrace",
    "Lounge",
]

VENUE_EVENT_TYPE_NAMES = [
    "Wedding",
    "Corporate Event",
    "Birthday Party",
    "Concert",
    "Festival",
    "Exhibition",
    "Workshop",
    "Seminar",
]

VENUE_SERVICES = [
    {"name": "Catering Veg", "description": "Rice, Bread, Salad, Drinks, Dessert, etc."},
    {
        "name": "Catering Non-Veg",
        "description": "Chicken, Beef, Fish, Rice, Bread, Salad, Drinks, Dessert, etc.",
    },
    {
        "name": "Decoration Basic",
        "description": "Basic decoration with flowers and lights. Includes a stage setup. 1 sofa set.",
    },
    {
        "name": "Decoration Premium",
        "description": (
            "Premium decoration with flowers, lights, and drapes. "
            "Includes a stage setup. 2 sofa sets. Photo booth."
        ),
    },
    {"name": "Music/DJ", "description": "Professional DJ services with sound system and lighting."},
    {
        "name": "Event Planning",
        "description": "Full event planning services including coordination on the event day.",
    },
]

VENUE_AMENITY_NAMES = [
    "WiFi",
    "Parking",
    "Restrooms",
    "Air Conditioning",
    "Heating",
    "Stage",
    "Sound System",
    "Projector",
    "Dance Floor",
    "Outdoor Area",
    "Kitchen",
    "Accessibility Features",
]

ROLE_NAMES = ["user", "vendor", "admin"]


def get_service_description(name: str):
    """Default description for a venue service, matched case-insensitively"""
    for service in VENUE_SERVICES:
        if service["name"].lower() == name.lower():
            return service["description"]
    return None
