"""Bangladesh administrative divisions used for vendor addresses"""

from typing import Optional

DISTRICTS_BY_DIVISION: dict[str, list[str]] = {
    "Barishal": ["Barguna", "Barishal", "Bhola", "Jhalokati", "Patuakhali", "Pirojpur"],
    "Chattogram": [
        "Bandarban",
        "Brahmanbaria",
        "Chandpur",
        "Chattogram",
        "Cox's Bazar",
        "Cumilla",
        "Feni",
        "Khagrachhari",
        "Lakshmipur",
        "Noakhali",
        "Rangamati",
    ],
    "Dhaka": [
        "Dhaka",
        "Faridpur",
        "Gazipur",
        "Gopalganj",
        "Kishoreganj",
        "Madaripur",
        "Manikganj",
        "Munshiganj",
        "Narayanganj",
        "Narsingdi",
        "Rajbari",
        "Shariatpur",
        "Tangail",
    ],
    "Khulna": [
        "Bagerhat",
        "Chuadanga",
        "Jashore",
        "Jhenaidah",
        "Khulna",
        "Kushtia",
        "Magura",
        "Meherpur",
        "Narail",
        "Satkhira",
    ],
    "Mymensingh": ["Jamalpur", "Mymensingh", "Netrokona", "Sherpur"],
    "Rajshahi": [
        "Bogura",
        "Chapai Nawabganj",
        "Joypurhat",
        "Naogaon",
        "Natore",
        "Pabna",
        "Rajshahi",
        "Sirajganj",
    ],
    "Rangpur": [
        "Dinajpur",
        "Gaibandha",
        "Kurigram",
        "Lalmonirhat",
        "Nilphamari",
        "Panchagarh",
        "Rangpur",
        "Thakurgaon",
    ],
    "Sylhet": ["Habiganj", "Moulvibazar", "Sunamganj", "Sylhet"],
}

# Only the districts where most vendors operate have a curated thana list;
# any thana is accepted for the rest.
THANAS_BY_DISTRICT: dict[str, list[str]] = {
    "Dhaka": [
        "Adabor",
        "Badda",
        "Banani",
        "Cantonment",
        "Dhamrai",
        "Dhanmondi",
        "Gulshan",
        "Hazaribagh",
        "Jatrabari",
        "Kafrul",
        "Keraniganj",
        "Khilgaon",
        "Lalbagh",
        "Mirpur",
        "Mohammadpur",
        "Motijheel",
        "Pallabi",
        "Ramna",
        "Savar",
        "Tejgaon",
        "Uttara",
    ],
    "Chattogram": [
        "Bakalia",
        "Bayazid",
        "Chandgaon",
        "Double Mooring",
        "Halishahar",
        "Hathazari",
        "Khulshi",
        "Kotwali",
        "Pahartali",
        "Panchlaish",
        "Patenga",
        "Sitakunda",
    ],
    "Gazipur": ["Gazipur Sadar", "Kaliakair", "Kaliganj", "Kapasia", "Sreepur", "Tongi"],
    "Narayanganj": ["Araihazar", "Bandar", "Narayanganj Sadar", "Rupganj", "Siddhirganj", "Sonargaon"],
    "Sylhet": [
        "Beanibazar",
        "Bishwanath",
        "Companiganj",
        "Golapganj",
        "Gowainghat",
        "Jaintiapur",
        "South Surma",
        "Sylhet Sadar",
    ],
    "Cox's Bazar": ["Chakaria", "Cox's Bazar Sadar", "Maheshkhali", "Ramu", "Teknaf", "Ukhia"],
    "Rajshahi": ["Boalia", "Godagari", "Motihar", "Paba", "Rajpara", "Shah Makhdum"],
    "Khulna": ["Daulatpur", "Dumuria", "Khalishpur", "Khan Jahan Ali", "Khulna Sadar", "Sonadanga"],
}


def get_divisions() -> list[str]:
    return sorted(DISTRICTS_BY_DIVISION)


def get_districts_for_division(division: str) -> list[str]:
    return DISTRICTS_BY_DIVISION.get(division, [])


def get_thanas_for_district(district: str) -> list[str]:
    return THANAS_BY_DISTRICT.get(district, [])


def validate_location(division: str, district: str, thana: str) -> Optional[str]:
    """Return an error message when the division/district/thana triple is inconsistent"""
    if division not in DISTRICTS_BY_DIVISION:
        return f"Unknown division: {division}"
    if district not in DISTRICTS_BY_DIVISION[division]:
        return f"{district} is not a district of {division}"
    known_thanas = THANAS_BY_DISTRICT.get(district)
    if known_thanas and thana not in known_thanas:
        return f"{thana} is not a thana of {district}"
    return None
