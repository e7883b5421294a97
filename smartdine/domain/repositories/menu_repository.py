"""
Menu Repository Interface.
Categories and menu items, always scoped by their restaurant.
"""

from typing import Any, Dict, List, Optional, Protocol

from smartdine.domain.models.menu import Category, MenuItem


class MenuRepository(Protocol):
    """Interface for category and menu item operations."""

    # Categories
    def get_category(self, category_id: int) -> Optional[Category]:
        ...

    def list_categories(self, restaurant_id: int) -> List[Category]:
        """Active categories ordered by position."""
        ...

    def item_counts_by_category(self, restaurant_id: int) -> Dict[int, int]:
        """Menu item count per category id."""
        ...

    def create_category(self, restaurant_id: int, data: Dict[str, Any]) -> Category:
        ...

    def update_category(self, category: Category, data: Dict[str, Any]) -> Category:
        ...

    def count_available_items(self, category_id: int) -> int:
        ...

    # Menu items
    def get_item(self, item_id: int) -> Optional[MenuItem]:
        ...

    def list_items(
        self,
        restaurant_id: int,
        category_id: Optional[int] = None,
        available: Optional[bool] = None,
    ) -> List[MenuItem]:
        ...

    def create_item(self, restaurant_id: int, data: Dict[str, Any]) -> MenuItem:
        ...

    def update_item(self, item: MenuItem, data: Dict[str, Any]) -> MenuItem:
        ...

    def delete_item(self, item: MenuItem) -> None:
        ...

    def count_restaurant_items(self, restaurant_id: int, available_only: bool = True) -> int:
        ...

    def popular_items(self, restaurant_id: int, limit: int = 5) -> List[MenuItem]:
        """Available items ranked by orders then views."""
        ...

    def available_items_for_menu(self, restaurant_id: int) -> List[MenuItem]:
        """Available items of active categories, in menu order."""
        ...
