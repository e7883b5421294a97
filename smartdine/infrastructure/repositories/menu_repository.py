"""
SQLAlchemy Implementation of Menu Repository.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from smartdine.domain.models.menu import Category, MenuItem
from smartdine.domain.repositories.menu_repository import MenuRepository


class SQLAlchemyMenuRepository(MenuRepository):
    """Category and menu item persistence using SQLAlchemy."""

    def __init__(self, db: Session):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    # ── Categories ──────────────────────────────────────────

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def list_categories(self, restaurant_id: int) -> List[Category]:
        return (
            self.db.query(Category)
            .filter(Category.restaurant_id == restaurant_id, Category.is_active.is_(True))
            .order_by(Category.order.asc(), Category.id.asc())
            .all()
        )

    def item_counts_by_category(self, restaurant_id: int) -> Dict[int, int]:
        rows = (
            self.db.query(MenuItem.category_id, func.count(MenuItem.id).label("count"))
            .filter(MenuItem.restaurant_id == restaurant_id)
            .group_by(MenuItem.category_id)
            .all()
        )
        return {r.category_id: r.count for r in rows}

    def create_category(self, restaurant_id: int, data: Dict[str, Any]) -> Category:
        return self._save(Category(restaurant_id=restaurant_id, **data))

    def update_category(self, category: Category, data: Dict[str, Any]) -> Category:
        for field, value in data.items():
            setattr(category, field, value)
        return self._save(category)

    def count_available_items(self, category_id: int) -> int:
        return (
            self.db.query(func.count(MenuItem.id))
            .filter(MenuItem.category_id == category_id, MenuItem.is_available.is_(True))
            .scalar()
            or 0
        )

    # ── Menu items ──────────────────────────────────────────

    def get_item(self, item_id: int) -> Optional[MenuItem]:
        return self.db.get(MenuItem, item_id)

    def list_items(
        self,
        restaurant_id: int,
        category_id: Optional[int] = None,
        available: Optional[bool] = None,
    ) -> List[MenuItem]:
        query = self.db.query(MenuItem).filter(MenuItem.restaurant_id == restaurant_id)
        if category_id is not None:
            query = query.filter(MenuItem.category_id == category_id)
        if available is not None:
            query = query.filter(MenuItem.is_available.is_(available))
        return query.order_by(MenuItem.order.asc(), MenuItem.id.asc()).all()

    def create_item(self, restaurant_id: int, data: Dict[str, Any]) -> MenuItem:
        return self._save(MenuItem(restaurant_id=restaurant_id, **data))

    def update_item(self, item: MenuItem, data: Dict[str, Any]) -> MenuItem:
        for field, value in data.items():
            setattr(item, field, value)
        return self._save(item)

    def delete_item(self, item: MenuItem) -> None:
        self.db.delete(item)
        self.db.commit()

    def count_restaurant_items(self, restaurant_id: int, available_only: bool = True) -> int:
        query = self.db.query(func.count(MenuItem.id)).filter(MenuItem.restaurant_id == restaurant_id)
        if available_only:
            query = query.filter(MenuItem.is_available.is_(True))
        return query.scalar() or 0

    def popular_items(self, restaurant_id: int, limit: int = 5) -> List[MenuItem]:
        return (
            self.db.query(MenuItem)
            .filter(MenuItem.restaurant_id == restaurant_id, MenuItem.is_available.is_(True))
            .order_by(MenuItem.order_count.desc(), MenuItem.view_count.desc(), MenuItem.id.asc())
            .limit(limit)
            .all()
        )

    def available_items_for_menu(self, restaurant_id: int) -> List[MenuItem]:
        return (
            self.db.query(MenuItem)
            .join(Category, MenuItem.category_id == Category.id)
            .filter(
                MenuItem.restaurant_id == restaurant_id,
                MenuItem.is_available.is_(True),
                Category.is_active.is_(True),
            )
            .order_by(MenuItem.order.asc(), MenuItem.id.asc())
            .all()
        )
