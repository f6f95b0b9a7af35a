import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ..auth import create_session, get_current_session
from ..database import get_db
from ..models import Password, Role, User, UserSession
from ..rate_limiter import create_rate_limiter
from ..security_utils import hash_password, is_password_breached, verify_password
from ..shared.validators import validate_email, validate_name, validate_password, validate_username
from ..two_factor import is_two_factor_enabled, verify_second_factor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

login_rate_limiter = create_rate_limiter(limit=10, window_seconds=300, key_prefix="login")
signup_rate_limiter = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="signup")


# ==================== Schemas ====================


class SignupRequest(BaseModel):
    email: str
    username: str
    name: Optional[str] = None
    password: str
    confirmPassword: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("username")
    @classmethod
    def check_username(cls, v):
        return validate_username(v)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return validate_name(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return validate_password(v)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirmPassword:
            raise ValueError("The passwords must match")
        return self


class LoginRequest(BaseModel):
    username: str  # username or email
    password: str
    code: Optional[str] = None  # TOTP or backup code when 2FA is enabled


class ReverifyRequest(BaseModel):
    code: str


class SessionResponse(BaseModel):
    token: str
    expires_at: datetime
    username: str


# ==================== Endpoints ====================


@router.post("/signup", response_model=SessionResponse, status_code=201)
async def signup(
    data: SignupRequest,
    db: Session = Depends(get_db),
    _: None = Depends(signup_rate_limiter),
):
    """Create an account with the ``user`` role and log it in"""
    if db.query(User).filter(User.email == data.email).first():
        raise HTTPException(status_code=409, detail="A user already exists with this email")
    if db.query(User).filter(User.username == data.username).first():
        raise HTTPException(status_code=409, detail="A user already exists with this username")
    if is_password_breached(data.password):
        raise HTTPException(status_code=400, detail="Password is too common")

    user = User(email=data.email, username=data.username, name=data.name)
    user.password = Password(hash=hash_password(data.password))
    role = db.query(Role).filter(Role.name == "user").first()
    if role is None:
        role = Role(name="user")
        db.add(role)
    user.roles.append(role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"👤 New user signed up: {user.username} (id={user.id})")

    session = create_session(db, user)
    return SessionResponse(token=session.token, expires_at=session.expires_at, username=user.username)


@router.post("/login", response_model=SessionResponse)
async def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    _: None = Depends(login_rate_limiter),
):
    """Password login; accounts with 2FA also need an authenticator or backup code"""
    identifier = data.username.strip().lower()
    user = (
        db.query(User)
        .filter(or_(User.username == identifier, func.lower(User.email) == identifier))
        .first()
    )

    if not user or not user.password or not verify_password(data.password, user.password.hash):
        logger.warning(f"⚠️ Failed login for '{identifier}'")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    if is_two_factor_enabled(db, user):
        if not data.code:
            raise HTTPException(
                status_code=401,
                detail="Two-factor code required",
                headers={"X-2FA-Required": "true"},
            )
        if not verify_second_factor(db, user, data.code):
            logger.warning(f"⚠️ Invalid 2FA code for user {user.id}")
            raise HTTPException(status_code=401, detail="Invalid code")

    session = create_session(db, user)
    return SessionResponse(token=session.token, expires_at=session.expires_at, username=user.username)


@router.post("/logout")
async def logout(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    db.delete(session)
    db.commit()
    return {"message": "Logged out"}


@router.post("/reverify")
async def reverify(
    data: ReverifyRequest,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Refresh the session's verification timestamp with a 2FA code"""
    if not verify_second_factor(db, session.user, data.code):
        raise HTTPException(status_code=400, detail="Invalid code")

    session.verified_at = datetime.utcnow()
    db.commit()
    return {"message": "Verified", "verified_at": session.verified_at}
