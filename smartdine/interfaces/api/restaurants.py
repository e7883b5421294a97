"""Restaurant API routes — ownership-gated CRUD, publication and analytics."""

from fastapi import APIRouter, Depends, status

from smartdine.application.services.menu_service import build_menu
from smartdine.application.services.restaurant_service import (
    create_restaurant,
    delete_restaurant,
    get_analytics,
    list_owner_restaurants,
    to_read,
    toggle_publish,
    update_restaurant,
)
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.models.user import User
from smartdine.domain.repositories.menu_repository import MenuRepository
from smartdine.domain.repositories.restaurant_repository import RestaurantRepository
from smartdine.domain.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from smartdine.interfaces.api.deps import get_current_user, get_owned_restaurant
from smartdine.interfaces.deps import get_menu_repository, get_restaurant_repository

router = APIRouter(prefix="/restaurants", tags=["Restaurants"])


@router.get("")
def list_restaurants(
    user: User = Depends(get_current_user),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
):
    """List the caller's active restaurants."""
    restaurants = list_owner_restaurants(repo, user)
    return {"success": True, "count": len(restaurants), "data": {"restaurants": restaurants}}


@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    body: RestaurantCreate,
    user: User = Depends(get_current_user),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
):
    restaurant = create_restaurant(repo, user, body)
    return {
        "success": True,
        "message": "Restaurant created successfully",
        "data": {"restaurant": to_read(repo, restaurant, with_counts=True)},
    }


@router.get("/{restaurant_id}")
def get_restaurant(
    restaurant: Restaurant = Depends(get_owned_restaurant),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
):
    return {"success": True, "data": {"restaurant": to_read(repo, restaurant, with_counts=True)}}


@router.put("/{restaurant_id}")
def update(
    body: RestaurantUpdate,
    restaurant: Restaurant = Depends(get_owned_restaurant),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
):
    restaurant = update_restaurant(repo, restaurant, body)
    return {
        "success": True,
        "message": "Restaurant updated successfully",
        "data": {"restaurant": to_read(repo, restaurant)},
    }


@router.delete("/{restaurant_id}")
def delete(
    restaurant: Restaurant = Depends(get_owned_restaurant),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
):
    """Soft delete: the restaurant disappears from listings and public lookups."""
    delete_restaurant(repo, restaurant)
    return {"success": True, "message": "Restaurant deleted successfully"}


@router.put("/{restaurant_id}/toggle-publish")
def toggle(
    restaurant: Restaurant = Depends(get_owned_restaurant),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
):
    restaurant = toggle_publish(repo, restaurant)
    state = "published" if restaurant.is_published else "unpublished"
    return {
        "success": True,
        "message": f"Restaurant {state} successfully",
        "data": {"restaurant": to_read(repo, restaurant)},
    }


@router.get("/{restaurant_id}/analytics")
def analytics(
    restaurant: Restaurant = Depends(get_owned_restaurant),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    return {"success": True, "data": {"analytics": get_analytics(menu_repo, restaurant)}}


@router.get("/{restaurant_id}/menus")
def menus(
    restaurant: Restaurant = Depends(get_owned_restaurant),
    menu_repo: MenuRepository = Depends(get_menu_repository),
):
    """Owner preview of the menu, views are not counted."""
    return {"success": True, "data": {"menus": [build_menu(menu_repo, restaurant)]}}
