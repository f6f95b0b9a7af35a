"""User profile router"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_optional_user
from ...database import get_db
from ...models import User
from .schemas import UserProfileResponse
from .service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.get("/{username}", response_model=UserProfileResponse)
async def get_user_profile(
    username: str,
    current_user: Optional[User] = Depends(get_optional_user),
    service: UserService = Depends(get_user_service),
):
    """Public profile; the owner also gets favorites, reviews and bookings"""
    return service.get_profile(username, current_user)
