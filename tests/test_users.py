from datetime import date, timedelta

from tests.helpers import signup


class TestProfiles:
    def test_public_view_hides_private_sections(self, client, user_headers, vendor):
        client.post("/favorites/toggle", json={"vendorId": vendor["id"]}, headers=user_headers)

        profile = client.get("/users/rahim").json()

        assert profile["username"] == "rahim"
        assert profile["isOwner"] is False
        assert profile["counts"] == {"reviews": 0, "favorites": 1, "bookings": 0}
        assert profile["favorites"] is None
        assert profile["reviews"] is None
        assert profile["bookings"] is None

    def test_other_users_never_see_private_sections(self, client, user_headers):
        stranger = signup(client, "stranger")
        profile = client.get("/users/rahim", headers=stranger).json()
        assert profile["isOwner"] is False
        assert profile["bookings"] is None

    def test_owner_view(self, client, user_headers, vendor):
        client.post("/favorites/toggle", json={"vendorId": vendor["id"]}, headers=user_headers)
        client.post(f"/vendors/{vendor['slug']}/reviews", json={"rating": 5}, headers=user_headers)

        profile = client.get("/users/rahim", headers=user_headers).json()

        assert profile["isOwner"] is True
        assert [f["id"] for f in profile["favorites"]] == [vendor["id"]]
        assert len(profile["reviews"]) == 1
        assert profile["bookings"] == []
        assert profile["vendor"] is None

    def test_vendor_owner_sees_booking_preview(self, client, user_headers, vendor_headers, vendor):
        day = date.today() + timedelta(days=7)
        for offset in range(3):
            client.post(
                "/bookings",
                json={"vendorId": vendor["id"], "date": (day + timedelta(days=offset)).isoformat()},
                headers=user_headers,
            )

        profile = client.get("/users/karim", headers=vendor_headers).json()

        assert profile["vendor"]["slug"] == vendor["slug"]
        preview = profile["vendorBookings"]
        assert len(preview["pending"]) == 2
        assert preview["confirmed"] == []
        assert preview["counts"]["pending"] == 3

    def test_public_vendor_summary(self, client, vendor):
        profile = client.get("/users/KARIM").json()
        assert profile["vendor"]["businessName"] == "Dream Palace"
        assert profile["vendorBookings"] is None

    def test_unknown_user(self, client):
        assert client.get("/users/ghost").status_code == 404
