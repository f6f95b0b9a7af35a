import hashlib

import httpx
import pytest

from shuvodin import security_utils
from shuvodin.security_headers import get_security_headers_dict
from shuvodin.security_utils import (
    hash_password,
    is_password_breached,
    mask_sensitive_data,
    strip_html,
    verify_password,
)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong", hashed)

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestBreachCheck:
    @pytest.fixture(autouse=True)
    def enable_check(self, monkeypatch):
        monkeypatch.setattr(security_utils, "PASSWORD_BREACH_CHECK_ENABLED", True)

    def _respond(self, monkeypatch, status_code=200, text=""):
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return httpx.Response(status_code, text=text)

        monkeypatch.setattr(security_utils.httpx, "get", fake_get)
        return calls

    def test_only_prefix_is_sent(self, monkeypatch):
        calls = self._respond(monkeypatch, text="")
        is_password_breached("hunter22")
        url, timeout = calls[0]
        assert url.endswith("/" + hashlib.sha1(b"hunter22").hexdigest().upper()[:5])
        assert timeout == 1.0

    def test_match_in_range_response(self, monkeypatch):
        suffix = hashlib.sha1(b"hunter22").hexdigest().upper()[5:]
        self._respond(monkeypatch, text=f"ABCDEF:2\n{suffix}:41")
        assert is_password_breached("hunter22") is True

    def test_no_match(self, monkeypatch):
        self._respond(monkeypatch, text="ABCDEF:2")
        assert is_password_breached("hunter22") is False

    def test_lookup_failure_allows_password(self, monkeypatch):
        def boom(url, timeout):
            raise httpx.ConnectTimeout("slow")

        monkeypatch.setattr(security_utils.httpx, "get", boom)
        assert is_password_breached("hunter22") is False

    def test_server_error_allows_password(self, monkeypatch):
        self._respond(monkeypatch, status_code=503)
        assert is_password_breached("hunter22") is False

    def test_disabled(self, monkeypatch):
        monkeypatch.setattr(security_utils, "PASSWORD_BREACH_CHECK_ENABLED", False)
        assert is_password_breached("password") is False


def test_strip_html():
    assert strip_html("<p>Hello <b>there</b></p>") == "Hello there"
    assert strip_html(None) is None


def test_mask_sensitive_data():
    assert mask_sensitive_data("abcdefgh") == "****efgh"
    assert mask_sensitive_data("abc") == "***"


def test_security_headers():
    headers = get_security_headers_dict()
    assert headers["X-Content-Type-Options"] == "nosniff"
    assert "Content-Security-Policy" in headers


def test_security_headers_on_responses(client):
    response = client.get("/vendors/types")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Cache-Control"].startswith("no-store")
