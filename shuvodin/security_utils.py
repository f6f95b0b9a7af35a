"""
Security utilities: password hashing, session tokens, breached-password
lookup and free-text sanitization.
"""

import hashlib
import logging
import secrets
from typing import Optional

import bleach
import httpx
from passlib.context import CryptContext

from .config import PASSWORD_BREACH_CHECK_ENABLED, PWNED_PASSWORDS_TIMEOUT, PWNED_PASSWORDS_URL

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash; malformed hashes count as a mismatch"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


def is_password_breached(password: str) -> bool:
    """
    Check the password against the pwned-passwords k-anonymity range API.

    Only the first five hex characters of the SHA-1 digest leave the
    process. Network failures and timeouts allow the password.
    """
    if not PASSWORD_BREACH_CHECK_ENABLED:
        return False

    digest = hashlib.sha1(password.encode()).hexdigest().upper()  # noqa: S324 - API contract
    prefix, suffix = digest[:5], digest[5:]

    try:
        response = httpx.get(f"{PWNED_PASSWORDS_URL}/{prefix}", timeout=PWNED_PASSWORDS_TIMEOUT)
    except httpx.HTTPError as e:
        logger.warning(f"⚠️ Password breach lookup failed, allowing password: {e}")
        return False

    if response.status_code != 200:
        logger.warning(f"⚠️ Password breach lookup returned HTTP {response.status_code}")
        return False

    for line in response.text.splitlines():
        hash_suffix, _, count = line.partition(":")
        if hash_suffix.strip() == suffix:
            logger.info(f"🔒 Rejected password found {count.strip()} times in breach corpus")
            return True
    return False


# ============================================================================
# TOKENS
# ============================================================================


def generate_secure_token(length: int = 32) -> str:
    """Generate a cryptographically secure random token"""
    return secrets.token_urlsafe(length)


def mask_sensitive_data(data: str, visible_chars: int = 4) -> str:
    """Mask all but the last few characters, for logging tokens"""
    if len(data) <= visible_chars:
        return "*" * len(data)
    return "*" * (len(data) - visible_chars) + data[-visible_chars:]


# ============================================================================
# INPUT SANITIZATION
# ============================================================================


def strip_html(value: Optional[str]) -> Optional[str]:
    """Remove every HTML tag from user supplied free text (descriptions, reviews, messages)"""
    if value is None:
        return None
    return bleach.clean(value, tags=[], attributes={}, strip=True).strip()
