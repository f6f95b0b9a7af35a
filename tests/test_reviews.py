from shuvodin.models import Review, Vendor
from tests.helpers import signup


def _review(client, headers, slug, rating, comment=None):
    return client.post(f"/vendors/{slug}/reviews", json={"rating": rating, "comment": comment}, headers=headers)


class TestReviews:
    def test_rating_is_average_of_reviews(self, client, db, user_headers, vendor):
        other = signup(client, "jamal")
        third = signup(client, "salma")

        _review(client, user_headers, vendor["slug"], 5)
        _review(client, other, vendor["slug"], 4)
        response = _review(client, third, vendor["slug"], 4, "Lovely staff")

        assert response.status_code == 200
        assert response.json()["vendorRating"] == 4.3
        assert db.get(Vendor, vendor["id"]).rating == 4.3

    def test_second_submission_updates_first(self, client, db, user_headers, vendor):
        first = _review(client, user_headers, vendor["slug"], 2, "Meh").json()
        second = _review(client, user_headers, vendor["slug"], 5, "Changed my mind").json()

        assert first["created"] is True
        assert second["created"] is False
        assert second["review"]["id"] == first["review"]["id"]
        assert db.query(Review).count() == 1
        assert second["vendorRating"] == 5

    def test_owner_cannot_review_own_vendor(self, client, vendor_headers, vendor):
        assert _review(client, vendor_headers, vendor["slug"], 5).status_code == 403

    def test_rating_bounds(self, client, user_headers, vendor):
        assert _review(client, user_headers, vendor["slug"], 0).status_code == 422
        assert _review(client, user_headers, vendor["slug"], 6).status_code == 422

    def test_list_newest_first(self, client, user_headers, vendor):
        other = signup(client, "jamal")
        _review(client, user_headers, vendor["slug"], 5, "<b>Great</b>")
        _review(client, other, vendor["slug"], 3)

        reviews = client.get(f"/vendors/{vendor['slug']}/reviews").json()
        assert [r["username"] for r in reviews] == ["jamal", "rahim"]
        assert reviews[1]["comment"] == "Great"

    def test_unknown_vendor(self, client, user_headers):
        assert client.get("/vendors/nope/reviews").status_code == 404
        assert _review(client, user_headers, "nope", 5).status_code == 404

    def test_delete_recomputes_rating(self, client, db, user_headers, vendor):
        review = _review(client, user_headers, vendor["slug"], 4).json()["review"]

        stranger = signup(client, "stranger")
        assert client.delete(f"/reviews/{review['id']}", headers=stranger).status_code == 404

        response = client.delete(f"/reviews/{review['id']}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["vendorRating"] == 0
        assert db.get(Vendor, vendor["id"]).rating == 0

    def test_vendor_page_shows_review_count(self, client, user_headers, vendor):
        _review(client, user_headers, vendor["slug"], 5)
        page = client.get(f"/vendors/{vendor['slug']}").json()
        assert page["reviewCount"] == 1
        assert page["rating"] == 5
