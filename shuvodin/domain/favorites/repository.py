"""Favorites repository - the user/vendor shortlist association"""

from sqlalchemy import and_, delete, insert
from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Vendor, favorites


class FavoriteRepository:
    @staticmethod
    def is_favorited(db: Session, user_id: int, vendor_id: int) -> bool:
        row = db.execute(
            favorites.select().where(
                and_(favorites.c.user_id == user_id, favorites.c.vendor_id == vendor_id)
            )
        ).first()
        return row is not None

    @staticmethod
    def add(db: Session, user_id: int, vendor_id: int) -> None:
        db.execute(insert(favorites).values(user_id=user_id, vendor_id=vendor_id))
        db.commit()

    @staticmethod
    def remove(db: Session, user_id: int, vendor_id: int) -> None:
        db.execute(
            delete(favorites).where(
                and_(favorites.c.user_id == user_id, favorites.c.vendor_id == vendor_id)
            )
        )
        db.commit()

    @staticmethod
    def get_favorite_vendors(db: Session, user_id: int) -> list[Vendor]:
        return (
            db.query(Vendor)
            .join(favorites, favorites.c.vendor_id == Vendor.id)
            .filter(favorites.c.user_id == user_id)
            .options(joinedload(Vendor.vendor_type), selectinload(Vendor.gallery))
            .order_by(Vendor.created_at.desc(), Vendor.id.desc())
            .all()
        )

    @staticmethod
    def count_for_user(db: Session, user_id: int) -> int:
        return db.query(favorites).filter(favorites.c.user_id == user_id).count()
