"""
SQLAlchemy Implementation of Restaurant Repository.

Counters and the publish flag are changed with single UPDATE statements so
concurrent requests never lose an increment.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, not_, or_, update
from sqlalchemy.exc import IntegrityError

from smartdine.domain.models.menu import Category, MenuItem
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.repositories.restaurant_repository import RestaurantRepository
from smartdine.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyRestaurantRepository(SQLAlchemyRepository[Restaurant], RestaurantRepository):
    """Restaurant repository implementation using SQLAlchemy."""

    def _published(self):
        return self.db.query(Restaurant).filter(
            Restaurant.is_active.is_(True),
            Restaurant.is_published.is_(True),
        )

    def list_active_for_owner(self, owner_id: int) -> List[Restaurant]:
        return (
            self.db.query(Restaurant)
            .filter(Restaurant.owner_id == owner_id, Restaurant.is_active.is_(True))
            .order_by(Restaurant.created_at.desc(), Restaurant.id.desc())
            .all()
        )

    def get_counts(self, restaurant_id: int) -> Tuple[int, int]:
        categories = (
            self.db.query(func.count(Category.id))
            .filter(Category.restaurant_id == restaurant_id, Category.is_active.is_(True))
            .scalar()
            or 0
        )
        items = (
            self.db.query(func.count(MenuItem.id))
            .filter(MenuItem.restaurant_id == restaurant_id)
            .scalar()
            or 0
        )
        return categories, items

    def create_with_categories(self, data: Dict[str, Any], categories: List[Dict[str, Any]]) -> Restaurant:
        restaurant = Restaurant(**data)
        try:
            self.db.add(restaurant)
            self.db.flush()
            for category in categories:
                self.db.add(Category(restaurant_id=restaurant.id, **category))
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(restaurant)
        return restaurant

    def get_published_by_slug(self, slug: str) -> Optional[Restaurant]:
        return self._published().filter(Restaurant.slug == slug).first()

    def get_published_by_id_or_slug(self, value: str) -> Optional[Restaurant]:
        query = self._published()
        if value.isdigit():
            return query.filter(or_(Restaurant.id == int(value), Restaurant.slug == value)).first()
        return query.filter(Restaurant.slug == value).first()

    def soft_delete(self, restaurant: Restaurant) -> Restaurant:
        restaurant.is_active = False
        self.db.commit()
        self.db.refresh(restaurant)
        return restaurant

    def toggle_publish(self, restaurant: Restaurant) -> Restaurant:
        self.db.execute(
            update(Restaurant)
            .where(Restaurant.id == restaurant.id)
            .values(is_published=not_(Restaurant.is_published))
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.refresh(restaurant)
        return restaurant

    def save_qr_code(self, restaurant: Restaurant, code: str, public_url: str, generated_at: datetime) -> Restaurant:
        # only the artifact columns are written; qr_scan_count is left as stored
        self.db.execute(
            update(Restaurant)
            .where(Restaurant.id == restaurant.id)
            .values(qr_code=code, qr_public_url=public_url, qr_last_generated=generated_at)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        self.db.refresh(restaurant)
        return restaurant

    def increment_qr_scans(self, slug: str) -> bool:
        result = self.db.execute(
            update(Restaurant)
            .where(
                Restaurant.slug == slug,
                Restaurant.is_active.is_(True),
                Restaurant.is_published.is_(True),
            )
            .values(
                total_qr_scans=Restaurant.total_qr_scans + 1,
                qr_scan_count=Restaurant.qr_scan_count + 1,
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return result.rowcount > 0

    def increment_views(self, restaurant_id: int, viewed_at: datetime) -> None:
        self.db.execute(
            update(Restaurant)
            .where(Restaurant.id == restaurant_id)
            .values(
                total_menu_views=Restaurant.total_menu_views + 1,
                last_viewed_at=viewed_at,
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
