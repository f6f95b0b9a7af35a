import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session, joinedload

from .config import RECENT_VERIFICATION_MINUTES, SESSION_EXPIRATION_DAYS
from .database import get_db
from .models import User, UserSession, Vendor
from .security_utils import generate_secure_token, mask_sensitive_data
from .two_factor import is_two_factor_enabled

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_session_expiration_time() -> datetime:
    return datetime.utcnow() + timedelta(days=SESSION_EXPIRATION_DAYS)


def create_session(db: Session, user: User, verified: bool = True) -> UserSession:
    """Issue an opaque bearer token for ``user``"""
    session = UserSession(
        token=generate_secure_token(32),
        user_id=user.id,
        expires_at=get_session_expiration_time(),
        verified_at=datetime.utcnow() if verified else None,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info(f"✅ Session created for user {user.id}")
    return session


def _lookup_session(db: Session, token: str) -> Optional[UserSession]:
    session = (
        db.query(UserSession)
        .options(joinedload(UserSession.user))
        .filter(UserSession.token == token)
        .first()
    )
    if session is None:
        return None
    if session.expires_at <= datetime.utcnow():
        logger.info(f"ℹ️ Expired session {mask_sensitive_data(token)} for user {session.user_id}")
        db.delete(session)
        db.commit()
        return None
    return session


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> UserSession:
    """Resolve the bearer token to a live session or raise 401"""
    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    session = _lookup_session(db, credentials.credentials)
    if session is None:
        logger.warning(f"⚠️ Rejected token {mask_sensitive_data(credentials.credentials)}")
        raise HTTPException(
            status_code=401,
            detail="Session has expired. Please log in again.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


async def get_current_user(session: UserSession = Depends(get_current_session)) -> User:
    return session.user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Current user for public endpoints that personalise their output; never raises"""
    if not credentials:
        return None
    session = _lookup_session(db, credentials.credentials)
    return session.user if session else None


async def require_vendor(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Vendor:
    """The vendor owned by the current user; 403 for plain users"""
    vendor = db.query(Vendor).filter(Vendor.owner_id == current_user.id).first()
    if not vendor:
        logger.warning(f"⚠️ User {current_user.id} tried a vendor-only action without a vendor")
        raise HTTPException(status_code=403, detail="You need a vendor profile to do this")
    return vendor


async def require_recent_verification(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
) -> User:
    """
    Gate sensitive settings behind a recent password/2FA confirmation.

    Users without 2FA pass straight through. Everyone else must have
    verified this session within RECENT_VERIFICATION_MINUTES, otherwise
    a 403 with ``X-Verification-Required`` tells the client to call
    ``/auth/reverify`` first.
    """
    user = session.user
    if not is_two_factor_enabled(db, user):
        return user

    cutoff = datetime.utcnow() - timedelta(minutes=RECENT_VERIFICATION_MINUTES)
    if session.verified_at is None or session.verified_at < cutoff:
        logger.info(f"🔒 User {user.id} needs to re-verify before a sensitive action")
        raise HTTPException(
            status_code=403,
            detail="Please verify your identity to continue",
            headers={"X-Verification-Required": "true"},
        )
    return user
