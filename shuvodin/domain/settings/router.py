"""Settings router - account, security and privacy settings"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_recent_verification
from ...database import get_db
from ...models import User
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
from .service import SettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    """Dependency injection for SettingsService"""
    return SettingsService(db)


# ============================================================================
# ACCOUNT
# ============================================================================


@router.get("/account", response_model=AccountResponse)
async def get_account(
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.get_account(current_user)


@router.patch("/account", response_model=AccountResponse)
async def update_account(
    data: AccountUpdate,
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.update_account(current_user, data)


# ============================================================================
# TWO-FACTOR AUTHENTICATION
# ============================================================================


@router.get("/security/2fa", response_model=TwoFactorStatus)
async def get_two_factor_status(
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.get_two_factor_status(current_user)


@router.post("/security/2fa")
async def start_two_factor(
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Begin setup - creates a pending TOTP secret"""
    return service.start_two_factor(current_user)


@router.get("/security/2fa/verify", response_model=TwoFactorSetupResponse)
async def get_two_factor_setup(
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    """otpauth URI and QR code for the pending setup"""
    return service.get_two_factor_setup(current_user)


@router.post("/security/2fa/verify")
async def verify_two_factor(
    data: TwoFactorVerifyRequest,
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    """Confirm the pending setup with a code, or cancel it"""
    return service.verify_two_factor(current_user, data)


@router.post("/security/2fa/disable")
async def disable_two_factor(
    current_user: User = Depends(require_recent_verification),
    service: SettingsService = Depends(get_settings_service),
):
    return service.disable_two_factor(current_user)


@router.post("/security/2fa/backup-codes", response_model=BackupCodesResponse)
async def regenerate_backup_codes(
    current_user: User = Depends(require_recent_verification),
    service: SettingsService = Depends(get_settings_service),
):
    return service.regenerate_backup_codes(current_user)


# ============================================================================
# PASSKEYS
# ============================================================================


@router.get("/security/passkeys", response_model=list[PasskeyResponse])
async def list_passkeys(
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.list_passkeys(current_user)


@router.delete("/security/passkeys/{passkey_id}")
async def delete_passkey(
    passkey_id: str,
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.delete_passkey(current_user, passkey_id)


# ============================================================================
# PASSWORD
# ============================================================================


@router.post("/security/password/create", status_code=201)
async def create_password(
    data: PasswordCreateRequest,
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.create_password(current_user, data)


@router.put("/security/password")
async def change_password(
    data: PasswordChangeRequest,
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.change_password(current_user, data)


# ============================================================================
# PRIVACY
# ============================================================================


@router.get("/privacy/download")
async def download_my_data(
    sections: Optional[str] = Query(None, description="Comma separated: profile,bookings,reviews,favorites"),
    current_user: User = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service),
):
    return service.export_data(current_user, sections)
