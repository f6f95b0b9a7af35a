"""Settings service - account, two-factor, passkeys, password and data export"""

import json
import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...models import TWO_FA_TYPE, TWO_FA_VERIFY_TYPE, Passkey, Password, User
from ...security_utils import hash_password, is_password_breached, verify_password
from ...two_factor import (
    encrypt_backup_codes,
    generate_backup_codes,
    get_otp_uri,
    get_verification,
    is_two_factor_enabled,
    make_qr_code_data_url,
    start_two_factor_setup,
    verify_totp_code,
)
from ..bookings.repository import BookingRepository
from ..bookings.service import booking_response
from ..favorites.service import favorite_summaries
from ..reviews.repository import ReviewRepository
from ..reviews.service import review_response
from .schemas import (
    AccountResponse,
    AccountUpdate,
    BackupCodesResponse,
    PasskeyResponse,
    PasswordChangeRequest,
    PasswordCreateRequest,
    TwoFactorSetupResponse,
    TwoFactorStatus,
    TwoFactorVerifyRequest,
)

logger = logging.getLogger(__name__)

EXPORT_SECTIONS = ("profile", "bookings", "reviews", "favorites")


class SettingsService:
    def __init__(self, db: Session):
        self.db = db

    # ==================== Account ====================

    def get_account(self, user: User) -> AccountResponse:
        return AccountResponse(
            id=user.id,
            email=user.email,
            username=user.username,
            name=user.name,
            imageKey=user.image.object_key if user.image else None,
            roles=sorted(role.name for role in user.roles),
            hasPassword=user.password is not None,
            isTwoFactorEnabled=is_two_factor_enabled(self.db, user),
            passkeyCount=len(user.passkeys),
            created_at=user.created_at,
        )

    def update_account(self, user: User, data: AccountUpdate) -> AccountResponse:
        taken = (
            self.db.query(User.id)
            .filter(User.username == data.username, User.id != user.id)
            .first()
        )
        if taken:
            raise HTTPException(status_code=409, detail="A user already exists with this username")

        user.username = data.username
        if "name" in data.model_fields_set:
            user.name = data.name
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"👤 Account updated for user {user.id}")
        return self.get_account(user)

    # ==================== Two-factor ====================

    def get_two_factor_status(self, user: User) -> TwoFactorStatus:
        return TwoFactorStatus(is2FAEnabled=is_two_factor_enabled(self.db, user))

    def start_two_factor(self, user: User) -> dict:
        start_two_factor_setup(self.db, user)
        return {"message": "Scan the QR code with your authenticator app", "next": "/settings/security/2fa/verify"}

    def get_two_factor_setup(self, user: User) -> TwoFactorSetupResponse:
        pending = get_verification(self.db, user.id, TWO_FA_VERIFY_TYPE)
        if not pending:
            raise HTTPException(status_code=404, detail="No pending two-factor setup")
        otp_uri = get_otp_uri(pending, user.email)
        return TwoFactorSetupResponse(otpUri=otp_uri, qrCode=make_qr_code_data_url(otp_uri))

    def verify_two_factor(self, user: User, data: TwoFactorVerifyRequest):
        pending = get_verification(self.db, user.id, TWO_FA_VERIFY_TYPE)
        if not pending:
            raise HTTPException(status_code=404, detail="No pending two-factor setup")

        if data.intent == "cancel":
            self.db.delete(pending)
            self.db.commit()
            logger.info(f"ℹ️ 2FA setup cancelled by user {user.id}")
            return {"message": "Two-factor setup cancelled"}

        if not verify_totp_code(pending, data.code):
            raise HTTPException(status_code=400, detail="Invalid code")

        previous = get_verification(self.db, user.id, TWO_FA_TYPE)
        if previous is not None:
            self.db.delete(previous)
            self.db.flush()

        backup_codes = generate_backup_codes()
        pending.type = TWO_FA_TYPE
        pending.expires_at = None
        pending.backup_codes = encrypt_backup_codes(backup_codes)
        self.db.commit()

        logger.info(f"✅ 2FA enabled for user {user.id}")
        return BackupCodesResponse(message="Two-factor authentication enabled", backupCodes=backup_codes)

    def disable_two_factor(self, user: User) -> dict:
        verification = get_verification(self.db, user.id, TWO_FA_TYPE)
        if not verification:
            raise HTTPException(status_code=400, detail="Two-factor authentication is not enabled")
        self.db.delete(verification)
        self.db.commit()
        logger.info(f"🔓 2FA disabled for user {user.id}")
        return {"message": "Two-factor authentication disabled"}

    def regenerate_backup_codes(self, user: User) -> BackupCodesResponse:
        verification = get_verification(self.db, user.id, TWO_FA_TYPE)
        if not verification:
            raise HTTPException(status_code=400, detail="Two-factor authentication is not enabled")

        backup_codes = generate_backup_codes()
        verification.backup_codes = encrypt_backup_codes(backup_codes)
        self.db.commit()
        logger.info(f"🔑 Backup codes regenerated for user {user.id}")
        return BackupCodesResponse(message="New backup codes generated", backupCodes=backup_codes)

    # ==================== Passkeys ====================

    def list_passkeys(self, user: User) -> list[PasskeyResponse]:
        passkeys = (
            self.db.query(Passkey)
            .filter(Passkey.user_id == user.id)
            .order_by(Passkey.created_at.desc())
            .all()
        )
        return [
            PasskeyResponse(id=p.id, deviceType=p.device_type, backedUp=p.backed_up, createdAt=p.created_at)
            for p in passkeys
        ]

    def delete_passkey(self, user: User, passkey_id: str) -> dict:
        passkey = (
            self.db.query(Passkey)
            .filter(Passkey.id == passkey_id, Passkey.user_id == user.id)
            .first()
        )
        if not passkey:
            raise HTTPException(status_code=404, detail="Passkey not found")
        self.db.delete(passkey)
        self.db.commit()
        logger.info(f"🗑️ Passkey deleted for user {user.id}")
        return {"message": "Passkey deleted"}

    # ==================== Password ====================

    @staticmethod
    def _reject_breached(password: str) -> None:
        if is_password_breached(password):
            raise HTTPException(status_code=400, detail="Password is too common")

    def create_password(self, user: User, data: PasswordCreateRequest) -> dict:
        if user.password is not None:
            raise HTTPException(status_code=409, detail="You already have a password")
        self._reject_breached(data.newPassword)

        self.db.add(Password(user_id=user.id, hash=hash_password(data.newPassword)))
        self.db.commit()
        logger.info(f"🔐 Password created for user {user.id}")
        return {"message": "Password created"}

    def change_password(self, user: User, data: PasswordChangeRequest) -> dict:
        if user.password is None or not verify_password(data.currentPassword, user.password.hash):
            raise HTTPException(status_code=400, detail="Incorrect password")
        self._reject_breached(data.newPassword)

        user.password.hash = hash_password(data.newPassword)
        self.db.commit()
        logger.info(f"🔐 Password changed for user {user.id}")
        return {"message": "Password changed"}

    # ==================== Data export ====================

    def export_data(self, user: User, sections: Optional[str] = None) -> StreamingResponse:
        """Download the user's data as a JSON attachment"""
        requested = [s.strip() for s in sections.split(",") if s.strip()] if sections else list(EXPORT_SECTIONS)
        unknown = [s for s in requested if s not in EXPORT_SECTIONS]
        if unknown:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown sections: {', '.join(unknown)}. Allowed: {', '.join(EXPORT_SECTIONS)}",
            )

        data = {"exportedAt": datetime.utcnow().isoformat()}
        if "profile" in requested:
            data["profile"] = self.get_account(user).model_dump(mode="json")
        if "bookings" in requested:
            data["bookings"] = [
                booking_response(b).model_dump(mode="json")
                for b in BookingRepository.get_user_bookings(self.db, user.id)
            ]
        if "reviews" in requested:
            data["reviews"] = [
                review_response(r).model_dump(mode="json")
                for r in ReviewRepository.get_user_reviews(self.db, user.id)
            ]
        if "favorites" in requested:
            data["favorites"] = [v.model_dump(mode="json") for v in favorite_summaries(self.db, user)]

        filename = f"shuvodin-data-{user.username}-{datetime.utcnow().strftime('%Y%m%d%H%M%S')}.json"
        logger.info(f"✅ Data export for user {user.id}: {', '.join(requested)}")

        return StreamingResponse(
            iter([json.dumps(data, indent=2)]),
            media_type="application/json",
            headers={
                "Content-Disposition": f"attachment; filename={filename}",
                "Cache-Control": "no-cache",
            },
        )
