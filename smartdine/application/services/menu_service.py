"""Menu service — categories, menu items and the rendered public menu."""

import logging
from collections import defaultdict
from typing import Optional

from smartdine.core.exceptions import EntityNotFoundException, ValidationException
from smartdine.domain.models.menu import Category, MenuItem
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.repositories.menu_repository import MenuRepository
from smartdine.domain.schemas.menu import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    MenuCategory,
    MenuItemCreate,
    MenuItemRead,
    MenuItemUpdate,
    PublicMenu,
)
from smartdine.domain.schemas.restaurant import PublicRestaurantProfile

logger = logging.getLogger(__name__)


# ── Categories ──────────────────────────────────────────────

def list_categories(repo: MenuRepository, restaurant: Restaurant) -> list[CategoryRead]:
    counts = repo.item_counts_by_category(restaurant.id)
    result = []
    for category in repo.list_categories(restaurant.id):
        read = CategoryRead.model_validate(category)
        read.menu_item_count = counts.get(category.id, 0)
        result.append(read)
    return result


def create_category(repo: MenuRepository, restaurant: Restaurant, body: CategoryCreate) -> Category:
    return repo.create_category(restaurant.id, body.model_dump())


def update_category(repo: MenuRepository, category: Category, body: CategoryUpdate) -> Category:
    return repo.update_category(category, body.model_dump(exclude_unset=True, exclude_none=True))


def delete_category(repo: MenuRepository, category: Category) -> None:
    """Soft delete; refused while the category still holds available items."""
    if repo.count_available_items(category.id) > 0:
        raise ValidationException(
            "Cannot delete category with active menu items. Please move or delete items first."
        )
    repo.update_category(category, {"is_active": False})
    logger.info(f"Category {category.id} deactivated")


# ── Menu items ──────────────────────────────────────────────

def _ensure_category_of(repo: MenuRepository, restaurant_id: int, category_id: int) -> Category:
    category = repo.get_category(category_id)
    if category is None or category.restaurant_id != restaurant_id or not category.is_active:
        raise ValidationException(
            "Category does not belong to this restaurant",
            details={"field": "category_id"},
        )
    return category


def list_items(
    repo: MenuRepository,
    restaurant: Restaurant,
    category_id: Optional[int] = None,
    available: Optional[bool] = None,
) -> list[MenuItemRead]:
    items = repo.list_items(restaurant.id, category_id=category_id, available=available)
    return [MenuItemRead.model_validate(i) for i in items]


def create_item(repo: MenuRepository, restaurant: Restaurant, body: MenuItemCreate) -> MenuItem:
    _ensure_category_of(repo, restaurant.id, body.category_id)
    return repo.create_item(restaurant.id, body.model_dump(mode="json"))


def update_item(repo: MenuRepository, item: MenuItem, body: MenuItemUpdate) -> MenuItem:
    data = body.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    if "category_id" in data:
        _ensure_category_of(repo, item.restaurant_id, data["category_id"])
    return repo.update_item(item, data)


def delete_item(repo: MenuRepository, item: MenuItem) -> None:
    repo.delete_item(item)
    logger.info(f"Menu item {item.id} deleted")


# ── Menus ───────────────────────────────────────────────────

def build_menu_categories(repo: MenuRepository, restaurant: Restaurant) -> list[MenuCategory]:
    """Active categories in order, each carrying its available items."""
    items_by_category: dict[int, list[MenuItemRead]] = defaultdict(list)
    for item in repo.available_items_for_menu(restaurant.id):
        items_by_category[item.category_id].append(MenuItemRead.model_validate(item))

    categories = []
    for category in repo.list_categories(restaurant.id):
        menu_category = MenuCategory.model_validate(category)
        menu_category.items = items_by_category.get(category.id, [])
        menu_category.menu_item_count = len(menu_category.items)
        categories.append(menu_category)
    return categories


def build_menu(repo: MenuRepository, restaurant: Restaurant) -> PublicMenu:
    return PublicMenu(
        id=f"menu_{restaurant.id}",
        name=f"{restaurant.name} Menu",
        description=restaurant.description,
        restaurant=PublicRestaurantProfile.model_validate(restaurant),
        categories=build_menu_categories(repo, restaurant),
        created_at=restaurant.created_at,
        updated_at=restaurant.updated_at,
    )


def get_public_restaurant(restaurant: Optional[Restaurant]) -> Restaurant:
    if restaurant is None:
        raise EntityNotFoundException("Restaurant menu not found or not published")
    return restaurant
