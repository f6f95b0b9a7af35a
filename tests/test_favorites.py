from tests.helpers import create_vendor, signup


class TestFavorites:
    def test_toggle_is_its_own_inverse(self, client, user_headers, vendor):
        added = client.post("/favorites/toggle", json={"vendorId": vendor["id"]}, headers=user_headers)
        assert added.json() == {"message": "Vendor shortlisted!", "isFavorited": True}

        removed = client.post("/favorites/toggle", json={"vendorId": vendor["id"]}, headers=user_headers)
        assert removed.json() == {"message": "Vendor removed from shortlist!", "isFavorited": False}

        assert client.get("/favorites", headers=user_headers).json() == []

    def test_unknown_vendor(self, client, user_headers):
        response = client.post("/favorites/toggle", json={"vendorId": 424242}, headers=user_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Vendor not found"

    def test_list_favorites(self, client, db, user_headers, vendor):
        other = signup(client, "florist")
        second = create_vendor(client, db, other, business_name="Petal Pushers", vendor_type="flowers")

        for vendor_id in (vendor["id"], second["id"]):
            client.post("/favorites/toggle", json={"vendorId": vendor_id}, headers=user_headers)

        favorites = client.get("/favorites", headers=user_headers).json()
        assert [f["id"] for f in favorites] == [second["id"], vendor["id"]]
        assert all(f["isFavorited"] for f in favorites)

    def test_requires_login(self, client, vendor):
        assert client.post("/favorites/toggle", json={"vendorId": vendor["id"]}).status_code == 401
