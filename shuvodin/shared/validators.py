"""Shared validation utilities"""

import re
from typing import Optional
from urllib.parse import urlparse

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 40
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100
PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s()-]+$")


def validate_username(username: str) -> str:
    """
    Validate a username and normalize it to lowercase.

    Raises:
        ValueError: If the username is too short/long or has characters
            other than letters, numbers and underscores
    """
    username = (username or "").strip()
    if len(username) < USERNAME_MIN_LENGTH:
        raise ValueError("Username is too short")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValueError("Username is too long")
    if not USERNAME_PATTERN.match(username):
        raise ValueError("Username can only include letters, numbers, and underscores")
    return username.lower()


def validate_name(name: Optional[str]) -> Optional[str]:
    if name is None:
        return None
    name = name.strip()
    if len(name) < NAME_MIN_LENGTH:
        raise ValueError("Name is too short")
    if len(name) > NAME_MAX_LENGTH:
        raise ValueError("Name is too long")
    return name


def validate_password(password: str) -> str:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError("Password is too short")
    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValueError("Password is too long")
    return password


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")
    return email


def validate_optional_url(url: Optional[str]) -> Optional[str]:
    """Accept an http(s) URL; empty strings mean "clear the value" and become None"""
    if url is None:
        return None
    url = url.strip()
    if not url:
        return None
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid URL")
    return url


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a contact phone number.

    Bangladeshi mobile numbers are normalized to E.164 (+8801XXXXXXXXX);
    anything else with 7 to 15 digits (landlines, foreign numbers) is kept
    as entered.

    Raises:
        ValueError: If phone number is invalid
    """
    phone = (phone or "").strip()
    if not phone:
        return None

    if not PHONE_PATTERN.match(phone):
        raise ValueError("Phone number can only include digits, spaces, +, - and parentheses")

    digits = re.sub(r"\D", "", phone)
    local = digits[2:] if digits.startswith("880") else digits
    if len(local) == 11 and local.startswith("01"):
        return f"+88{local}"

    if not PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
        raise ValueError("Phone number must have between 7 and 15 digits")
    return phone


def find_duplicates(values: list) -> list:
    """Values that appear more than once, in first-seen order"""
    seen = set()
    duplicates = []
    for value in values:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    return duplicates
