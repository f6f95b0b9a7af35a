from datetime import date, timedelta

import pytest
from sqlalchemy import text

from shuvodin.domain.bookings.repository import BookingRepository
from shuvodin.domain.bookings.service import format_booking_date
from shuvodin.models import Booking
from tests.helpers import add_package, create_vendor, signup


@pytest.fixture
def wedding_day():
    return date.today() + timedelta(days=30)


def _request(client, headers, vendor_id, day, **extra):
    return client.post(
        "/bookings", json={"vendorId": vendor_id, "date": day.isoformat(), **extra}, headers=headers
    )


class TestRequestBooking:
    def test_creates_pending_booking_with_package_price(self, client, user_headers, vendor_headers, vendor, wedding_day):
        package = add_package(client, vendor_headers, price=75000)

        response = _request(
            client, user_headers, vendor["id"], wedding_day, packageId=package["id"], message="<i>Hi</i> there"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["totalPrice"] == 75000
        assert body["package"]["id"] == package["id"]
        assert body["message"] == "Hi there"
        assert body["customerUsername"] == "rahim"

    def test_without_package_costs_nothing(self, client, user_headers, vendor, wedding_day):
        assert _request(client, user_headers, vendor["id"], wedding_day).json()["totalPrice"] == 0

    def test_past_date_rejected(self, client, user_headers, vendor):
        response = _request(client, user_headers, vendor["id"], date.today() - timedelta(days=1))
        assert response.status_code == 400

    def test_today_is_allowed(self, client, user_headers, vendor):
        assert _request(client, user_headers, vendor["id"], date.today()).status_code == 201

    def test_unknown_vendor(self, client, user_headers, wedding_day):
        assert _request(client, user_headers, 999, wedding_day).status_code == 404

    def test_cannot_book_own_vendor(self, client, vendor_headers, vendor, wedding_day):
        assert _request(client, vendor_headers, vendor["id"], wedding_day).status_code == 400

    def test_package_from_other_vendor(self, client, db, user_headers, vendor, wedding_day):
        other_headers = signup(client, "other_vendor")
        create_vendor(client, db, other_headers, business_name="Other Hall")
        foreign_package = add_package(client, other_headers)

        response = _request(client, user_headers, vendor["id"], wedding_day, packageId=foreign_package["id"])
        assert response.status_code == 400

    def test_duplicate_active_request_conflicts(self, client, user_headers, vendor, wedding_day):
        assert _request(client, user_headers, vendor["id"], wedding_day).status_code == 201
        assert _request(client, user_headers, vendor["id"], wedding_day).status_code == 409

    def test_can_request_again_after_cancelling(self, client, user_headers, vendor, wedding_day):
        booking = _request(client, user_headers, vendor["id"], wedding_day).json()
        client.post(f"/bookings/{booking['id']}/cancel", headers=user_headers)
        assert _request(client, user_headers, vendor["id"], wedding_day).status_code == 201

    def test_requires_login(self, client, vendor, wedding_day):
        assert _request(client, {}, vendor["id"], wedding_day).status_code == 401


class TestAcceptBooking:
    def test_accept_confirms_with_message(self, client, user_headers, vendor_headers, vendor, wedding_day):
        booking = _request(client, user_headers, vendor["id"], wedding_day).json()

        response = client.post(f"/vendors/bookings/{booking['id']}/accept", headers=vendor_headers)

        assert response.status_code == 200
        assert response.json()["booking"]["status"] == "confirmed"
        assert response.json()["message"] == f"Now you got a new booking on {format_booking_date(wedding_day)}."

    def test_daily_limit_blocks_second_confirmation(
        self, client, db, user_headers, vendor_headers, vendor, wedding_day
    ):
        second_customer = signup(client, "jamal")
        first = _request(client, user_headers, vendor["id"], wedding_day).json()
        second = _request(client, second_customer, vendor["id"], wedding_day).json()

        assert client.post(f"/vendors/bookings/{first['id']}/accept", headers=vendor_headers).status_code == 200
        response = client.post(f"/vendors/bookings/{second['id']}/accept", headers=vendor_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "You have booking on this date."
        assert db.get(Booking, second["id"]).status == "pending"

    def test_raised_limit_allows_more(self, client, user_headers, vendor_headers, vendor, wedding_day):
        client.patch("/vendors/onboarding/settings", json={"dailyBookingLimit": 2}, headers=vendor_headers)
        second_customer = signup(client, "jamal")
        first = _request(client, user_headers, vendor["id"], wedding_day).json()
        second = _request(client, second_customer, vendor["id"], wedding_day).json()

        assert client.post(f"/vendors/bookings/{first['id']}/accept", headers=vendor_headers).status_code == 200
        assert client.post(f"/vendors/bookings/{second['id']}/accept", headers=vendor_headers).status_code == 200

    def test_limit_is_per_date(self, client, user_headers, vendor_headers, vendor, wedding_day):
        first = _request(client, user_headers, vendor["id"], wedding_day).json()
        other_day = _request(client, user_headers, vendor["id"], wedding_day + timedelta(days=1)).json()

        assert client.post(f"/vendors/bookings/{first['id']}/accept", headers=vendor_headers).status_code == 200
        assert client.post(f"/vendors/bookings/{other_day['id']}/accept", headers=vendor_headers).status_code == 200

    def test_only_pending_can_be_accepted(self, client, user_headers, vendor_headers, vendor, wedding_day):
        booking = _request(client, user_headers, vendor["id"], wedding_day).json()
        client.post(f"/vendors/bookings/{booking['id']}/decline", headers=vendor_headers)
        assert client.post(f"/vendors/bookings/{booking['id']}/accept", headers=vendor_headers).status_code == 400

    def test_booking_cancelled_while_accepting_stays_cancelled(
        self, client, db, monkeypatch, user_headers, vendor_headers, vendor, wedding_day
    ):
        booking = _request(client, user_headers, vendor["id"], wedding_day).json()
        real_lock_vendor = BookingRepository.lock_vendor

        def cancel_then_lock(session, vendor_id):
            # the customer cancels after the accept request has read the booking
            session.execute(text("UPDATE bookings SET status = 'cancelled' WHERE id = :id"), {"id": booking["id"]})
            session.commit()
            return real_lock_vendor(session, vendor_id)

        monkeypatch.setattr(BookingRepository, "lock_vendor", staticmethod(cancel_then_lock))

        response = client.post(f"/vendors/bookings/{booking['id']}/accept", headers=vendor_headers)

        assert response.status_code == 400
        db.expire_all()
        assert db.get(Booking, booking["id"]).status == "cancelled"

    def test_other_vendors_booking_is_hidden(self, client, db, user_headers, vendor, wedding_day):
        booking = _request(client, user_headers, vendor["id"], wedding_day).json()
        rival = signup(client, "rival")
        create_vendor(client, db, rival, business_name="Rival Hall")

        assert client.post(f"/vendors/bookings/{booking['id']}/accept", headers=rival).status_code == 404

    def test_plain_users_cannot_use_vendor_inbox(self, client, user_headers):
        assert client.get("/vendors/bookings", headers=user_headers).status_code == 403


class TestDeclineAndCancel:
    def test_decline_keeps_row(self, client, db, user_headers, vendor_headers, vendor, wedding_day):
        booking = _request(client, user_headers, vendor["id"], wedding_day).json()
        response = client.post(f"/vendors/bookings/{booking['id']}/decline", headers=vendor_headers)
        assert response.json()["booking"]["status"] == "declined"
        assert db.get(Booking, booking["id"]) is not None

    def test_vendor_can_decline_confirmed(self, client, user_headers, vendor_headers, vendor, wedding_day):
        booking = _request(client, user_headers, vendor["id"], wedding_day).json()
        client.post(f"/vendors/bookings/{booking['id']}/accept", headers=vendor_headers)
        response = client.post(f"/vendors/bookings/{booking['id']}/decline", headers=vendor_headers)
        assert response.status_code == 200

    def test_cancel_own_booking(self, client, user_headers, vendor, wedding_day):
        booking = _request(client, user_headers, vendor["id"], wedding_day).json()
        response = client.post(f"/bookings/{booking['id']}/cancel", headers=user_headers)
        assert response.json()["booking"]["status"] == "cancelled"
        assert client.post(f"/bookings/{booking['id']}/cancel", headers=user_headers).status_code == 400

    def test_cannot_cancel_someone_elses_booking(self, client, user_headers, vendor, wedding_day):
        booking = _request(client, user_headers, vendor["id"], wedding_day).json()
        stranger = signup(client, "stranger")
        assert client.post(f"/bookings/{booking['id']}/cancel", headers=stranger).status_code == 404


class TestBookingLists:
    def test_my_bookings_newest_date_first_with_status_filter(
        self, client, user_headers, vendor_headers, vendor, wedding_day
    ):
        early = _request(client, user_headers, vendor["id"], wedding_day).json()
        late = _request(client, user_headers, vendor["id"], wedding_day + timedelta(days=10)).json()
        client.post(f"/vendors/bookings/{early['id']}/accept", headers=vendor_headers)

        all_bookings = client.get("/bookings", headers=user_headers).json()
        assert [b["id"] for b in all_bookings] == [late["id"], early["id"]]

        confirmed = client.get("/bookings", params={"status": "confirmed"}, headers=user_headers).json()
        assert [b["id"] for b in confirmed] == [early["id"]]

        assert client.get("/bookings", params={"status": "lost"}, headers=user_headers).status_code == 400

    def test_vendor_inbox(self, client, user_headers, vendor_headers, vendor, wedding_day):
        confirmed = _request(client, user_headers, vendor["id"], wedding_day).json()
        pending = _request(client, user_headers, vendor["id"], wedding_day + timedelta(days=5)).json()
        declined = _request(client, user_headers, vendor["id"], wedding_day + timedelta(days=6)).json()
        client.post(f"/vendors/bookings/{confirmed['id']}/accept", headers=vendor_headers)
        client.post(f"/vendors/bookings/{declined['id']}/decline", headers=vendor_headers)

        inbox = client.get("/vendors/bookings", headers=vendor_headers).json()

        assert [b["id"] for b in inbox["bookings"]] == [pending["id"], confirmed["id"]]
        assert inbox["counts"] == {"pending": 1, "confirmed": 1, "declined": 1, "cancelled": 0}


def test_format_booking_date():
    assert format_booking_date(date(2026, 3, 5)) == "05 Mar, 2026"
