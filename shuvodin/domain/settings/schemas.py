"""Settings schemas - account, two-factor, passkeys and password"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import validate_name, validate_password, validate_username


class AccountResponse(BaseModel):
    id: int
    email: str
    username: str
    name: Optional[str] = None
    imageKey: Optional[str] = None
    roles: list[str]
    hasPassword: bool
    isTwoFactorEnabled: bool
    passkeyCount: int
    created_at: Optional[datetime] = None


class AccountUpdate(BaseModel):
    username: str
    name: Optional[str] = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v):
        return validate_username(v)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_name(v)


class TwoFactorStatus(BaseModel):
    is2FAEnabled: bool


class TwoFactorSetupResponse(BaseModel):
    otpUri: str
    qrCode: str  # PNG data URL


class TwoFactorVerifyRequest(BaseModel):
    intent: Literal["verify", "cancel"]
    code: Optional[str] = None

    @model_validator(mode="after")
    def code_required_for_verify(self):
        if self.intent == "verify":
            if not self.code or len(self.code.strip()) != 6:
                raise ValueError("Code must be 6 characters")
            self.code = self.code.strip()
        return self


class BackupCodesResponse(BaseModel):
    message: str
    backupCodes: list[str]


class PasskeyResponse(BaseModel):
    id: str
    deviceType: str
    backedUp: bool
    createdAt: Optional[datetime] = None


class PasswordCreateRequest(BaseModel):
    newPassword: str
    confirmPassword: str

    @field_validator("newPassword")
    @classmethod
    def check_password(cls, v):
        return validate_password(v)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.newPassword != self.confirmPassword:
            raise ValueError("The passwords must match")
        return self


class PasswordChangeRequest(PasswordCreateRequest):
    currentPassword: str
