"""Request helpers shared by the API tests"""

from shuvodin.models import VendorType

DEFAULT_PASSWORD = "correct-horse"


def signup(client, username: str, email: str = None, password: str = DEFAULT_PASSWORD) -> dict:
    """Create an account and return bearer headers for it"""
    response = client.post(
        "/auth/signup",
        json={
            "email": email or f"{username}@example.com",
            "username": username,
            "name": username.title(),
            "password": password,
            "confirmPassword": password,
        },
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def vendor_type_id(db, slug: str) -> int:
    return db.query(VendorType).filter(VendorType.slug == slug).one().id


def create_vendor(
    client, db, headers: dict, business_name: str = "Dream Palace", vendor_type: str = "venues", **overrides
) -> dict:
    """Run the general onboarding step and return the vendor payload"""
    payload = {
        "businessName": business_name,
        "vendorTypeId": vendor_type_id(db, vendor_type),
        "division": "Dhaka",
        "district": "Dhaka",
        "thana": "Gulshan",
        "address": "Road 11, Gulshan 2",
        "description": "A lovely place for weddings and receptions.",
    }
    payload.update(overrides)
    response = client.put("/vendors/onboarding/general", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["vendor"]


def add_package(client, headers: dict, title: str = "Standard", price: float = 50000) -> dict:
    response = client.post(
        "/vendors/onboarding/packages",
        json={"title": title, "description": "Full day", "price": price},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
