"""
TOTP two-factor helpers.

A pending setup is a ``2fa-verify`` Verification row keyed by the user id;
confirming a code turns it into the ``2fa`` row, which also carries the
Fernet-encrypted backup codes.
"""

import base64
import hashlib
import io
import logging
import secrets
import string
from typing import Optional

import pyotp
import qrcode
from cryptography.fernet import Fernet, InvalidToken
from sqlalchemy.orm import Session

from .config import BACKUP_CODE_COUNT, SECRET_KEY, TOTP_ISSUER
from .models import TWO_FA_TYPE, TWO_FA_VERIFY_TYPE, User, Verification

logger = logging.getLogger(__name__)


# Generate encryption key from SECRET_KEY
def get_fernet_key():
    key = hashlib.sha256(SECRET_KEY.encode()).digest()
    return base64.urlsafe_b64encode(key)


cipher = Fernet(get_fernet_key())


# ==================== Backup codes ====================


def generate_backup_codes(count: int = BACKUP_CODE_COUNT) -> list[str]:
    """Generate cryptographically secure XXXX-XXXX backup codes"""
    charset = string.ascii_uppercase + string.digits
    codes = []
    for _ in range(count):
        first = "".join(secrets.choice(charset) for _ in range(4))
        second = "".join(secrets.choice(charset) for _ in range(4))
        codes.append(f"{first}-{second}")
    return codes


def encrypt_backup_codes(codes: list[str]) -> list[str]:
    return [cipher.encrypt(code.encode()).decode() for code in codes]


def decrypt_backup_codes(encrypted_codes: list[str]) -> list[str]:
    return [cipher.decrypt(code.encode()).decode() for code in encrypted_codes]


def normalize_backup_code(code: str) -> str:
    return code.upper().replace(" ", "")


# ==================== Verification records ====================


def get_verification(db: Session, user_id: int, verification_type: str) -> Optional[Verification]:
    return (
        db.query(Verification)
        .filter(Verification.target == str(user_id), Verification.type == verification_type)
        .first()
    )


def is_two_factor_enabled(db: Session, user: User) -> bool:
    return get_verification(db, user.id, TWO_FA_TYPE) is not None


def start_two_factor_setup(db: Session, user: User) -> Verification:
    """Create or replace the pending setup with a fresh secret"""
    secret = pyotp.random_base32()
    verification = get_verification(db, user.id, TWO_FA_VERIFY_TYPE)
    if verification is None:
        verification = Verification(type=TWO_FA_VERIFY_TYPE, target=str(user.id), secret=secret)
        db.add(verification)
    else:
        verification.secret = secret

    verification.algorithm = "SHA1"
    verification.digits = 6
    verification.period = 30
    db.commit()
    db.refresh(verification)
    logger.info(f"🔐 Started 2FA setup for user {user.id}")
    return verification


def get_totp(verification: Verification) -> pyotp.TOTP:
    return pyotp.TOTP(
        verification.secret,
        digits=verification.digits,
        interval=verification.period,
        digest=getattr(hashlib, verification.algorithm.lower()),
    )


def verify_totp_code(verification: Verification, code: str) -> bool:
    """Accept the current code or one step either side for clock drift"""
    return get_totp(verification).verify(code.strip(), valid_window=1)


def get_otp_uri(verification: Verification, account_name: str) -> str:
    return get_totp(verification).provisioning_uri(name=account_name, issuer_name=TOTP_ISSUER)


def make_qr_code_data_url(data: str) -> str:
    """Render ``data`` as a base64 PNG data URL"""
    qr = qrcode.QRCode(version=1, box_size=10, border=4)
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return f"data:image/png;base64,{base64.b64encode(buffer.getvalue()).decode()}"


def consume_backup_code(db: Session, verification: Verification, code: str) -> bool:
    """Check a backup code and remove it so it cannot be used twice"""
    if not verification.backup_codes:
        return False

    try:
        codes = decrypt_backup_codes(verification.backup_codes)
    except InvalidToken:
        logger.error(f"❌ Backup codes for user {verification.target} could not be decrypted")
        return False

    normalized = normalize_backup_code(code)
    if normalized not in codes:
        return False

    codes.remove(normalized)
    verification.backup_codes = encrypt_backup_codes(codes)
    db.commit()
    logger.info(f"🔑 Backup code used for user {verification.target}, {len(codes)} remaining")
    return True


def verify_second_factor(db: Session, user: User, code: str) -> bool:
    """True when ``code`` is a valid TOTP code or an unused backup code for an enabled 2FA"""
    verification = get_verification(db, user.id, TWO_FA_TYPE)
    if verification is None:
        return False
    if verify_totp_code(verification, code):
        return True
    return consume_backup_code(db, verification, code)
