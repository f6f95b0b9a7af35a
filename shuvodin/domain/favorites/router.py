"""Favorites router - the user's vendor shortlist"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ..vendors.schemas import VendorSummary
from .service import FavoriteService, FavoriteToggleRequest, FavoriteToggleResponse

router = APIRouter(prefix="/favorites", tags=["Favorites"])


def get_favorite_service(db: Session = Depends(get_db)) -> FavoriteService:
    """Dependency injection for FavoriteService"""
    return FavoriteService(db)


@router.post("/toggle", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    data: FavoriteToggleRequest,
    current_user: User = Depends(get_current_user),
    service: FavoriteService = Depends(get_favorite_service),
):
    """Add the vendor to the shortlist, or remove it if already there"""
    return service.toggle(current_user, data.vendorId)


@router.get("", response_model=list[VendorSummary])
async def list_favorites(
    current_user: User = Depends(get_current_user),
    service: FavoriteService = Depends(get_favorite_service),
):
    return service.list_favorites(current_user)
