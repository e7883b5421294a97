"""Menu API routes — categories, menu items and the public menu."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from smartdine.application.services import menu_service
from smartdine.application.services.qr_service import record_view
from smartdine.domain.models.menu import Category, MenuItem
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.models.user import User
from smartdine.domain.repositories.menu_repository import MenuRepository
from smartdine.domain.repositories.restaurant_repository import RestaurantRepository
from smartdine.domain.schemas.menu import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    MenuItemCreate,
    MenuItemRead,
    MenuItemUpdate,
)
from smartdine.domain.schemas.restaurant import PublicRestaurantProfile
from smartdine.interfaces.api.deps import (
    get_optional_user,
    get_owned_category,
    get_owned_menu_item,
    get_owned_restaurant,
)
from smartdine.interfaces.deps import get_menu_repository, get_restaurant_repository

router = APIRouter(prefix="/menus", tags=["Menus"])


# ── Categories ──────────────────────────────────────────────

@router.get("/restaurants/{restaurant_id}/categories")
def list_categories(
    restaurant: Restaurant = Depends(get_owned_restaurant),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    categories = menu_service.list_categories(menu_repo, restaurant)
    return {"success": True, "count": len(categories), "data": {"categories": categories}}


@router.post("/restaurants/{restaurant_id}/categories", status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    restaurant: Restaurant = Depends(get_owned_restaurant),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    category = menu_service.create_category(menu_repo, restaurant, body)
    return {
        "success": True,
        "message": "Category created successfully",
        "data": {"category": CategoryRead.model_validate(category)},
    }


@router.put("/categories/{category_id}")
def update_category(
    body: CategoryUpdate,
    category: Category = Depends(get_owned_category),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    category = menu_service.update_category(menu_repo, category, body)
    return {
        "success": True,
        "message": "Category updated successfully",
        "data": {"category": CategoryRead.model_validate(category)},
    }


@router.delete("/categories/{category_id}")
def delete_category(
    category: Category = Depends(get_owned_category),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    menu_service.delete_category(menu_repo, category)
    return {"success": True, "message": "Category deleted successfully"}


# ── Menu items ──────────────────────────────────────────────

@router.get("/restaurants/{restaurant_id}/items")
def list_items(
    category: Optional[int] = Query(default=None),
    available: Optional[bool] = Query(default=None),
    restaurant: Restaurant = Depends(get_owned_restaurant),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    items = menu_service.list_items(menu_repo, restaurant, category_id=category, available=available)
    return {"success": True, "count": len(items), "data": {"items": items}}


@router.post("/restaurants/{restaurant_id}/items", status_code=status.HTTP_201_CREATED)
def create_item(
    body: MenuItemCreate,
    restaurant: Restaurant = Depends(get_owned_restaurant),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    item = menu_service.create_item(menu_repo, restaurant, body)
    return {
        "success": True,
        "message": "Menu item created successfully",
        "data": {"item": MenuItemRead.model_validate(item)},
    }


@router.get("/items/{item_id}")
def get_item(item: MenuItem = Depends(get_owned_menu_item)):
    return {"success": True, "data": {"item": MenuItemRead.model_validate(item)}}


@router.put("/items/{item_id}")
def update_item(
    body: MenuItemUpdate,
    item: MenuItem = Depends(get_owned_menu_item),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    item = menu_service.update_item(menu_repo, item, body)
    return {
        "success": True,
        "message": "Menu item updated successfully",
        "data": {"item": MenuItemRead.model_validate(item)},
    }


@router.delete("/items/{item_id}")
def delete_item(
    item: MenuItem = Depends(get_owned_menu_item),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    menu_service.delete_item(menu_repo, item)
    return {"success": True, "message": "Menu item deleted successfully"}


# ── Public menu ─────────────────────────────────────────────

def _public_response(
    restaurant: Restaurant,
    repo: RestaurantRepository,
    menu_repo: MenuRepository,
) -> dict:
    data = {
        "restaurant": PublicRestaurantProfile.model_validate(restaurant),
        "categories": menu_service.build_menu_categories(menu_repo, restaurant),
    }
    record_view(repo, restaurant)
    return {"success": True, "data": data}


@router.get("/public/restaurant/{id_or_slug}")
def public_restaurant(
    id_or_slug: str,
    user: Optional[User] = Depends(get_optional_user),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    restaurant = menu_service.get_public_restaurant(repo.get_published_by_id_or_slug(id_or_slug))
    return _public_response(restaurant, repo, menu_repo)


@router.get("/public/{slug}")
def public_menu(
    slug: str,
    user: Optional[User] = Depends(get_optional_user),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    restaurant = menu_service.get_public_restaurant(repo.get_published_by_slug(slug))
    return _public_response(restaurant, repo, menu_repo)
