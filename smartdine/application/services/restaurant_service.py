"""Restaurant service — ownership rules, slugs, publication and analytics."""

import re
import time
import unicodedata
from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError

from smartdine.config import get_settings
from smartdine.core.exceptions import ForbiddenException, ValidationException
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.models.user import User, UserRole
from smartdine.domain.repositories.menu_repository import MenuRepository
from smartdine.domain.repositories.restaurant_repository import RestaurantRepository
from smartdine.domain.schemas.restaurant import (
    CategoryItemCount,
    PopularItem,
    RestaurantAnalytics,
    RestaurantCreate,
    RestaurantRead,
    RestaurantUpdate,
)

settings = get_settings()
logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Appetizers", "order": 1, "color": "#dc2626"},
    {"name": "Main Course", "order": 2, "color": "#059669"},
    {"name": "Desserts", "order": 3, "color": "#7c3aed"},
    {"name": "Beverages", "order": 4, "color": "#0891b2"},
]

# slug column is String(160): base + "-" + 13-digit millis stays well inside it
SLUG_BASE_MAX_LENGTH = 100

_NON_WORD = re.compile(r"[^\w ]+")
_SPACES = re.compile(r" +")


def can_manage(user: User, restaurant: Restaurant) -> bool:
    if user.role == UserRole.ADMIN:
        return True
    if user.role == UserRole.OWNER:
        return restaurant.owner_id == user.id
    return False


def authorize_restaurant_access(user: User, restaurant: Restaurant) -> None:
    """Admins manage every restaurant, owners only their own."""
    if not can_manage(user, restaurant):
        logger.warning("Ownership check failed", user_id=user.id, restaurant_id=restaurant.id)
        raise ForbiddenException("You can only access your own restaurants.")


def slug_base(name: str) -> str:
    """Transliterate to ASCII, drop punctuation and hyphenate spaces."""
    ascii_name = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    cleaned = _NON_WORD.sub("", ascii_name.lower()).strip()
    return _SPACES.sub("-", cleaned)


def generate_slug(name: str, now_ms: Optional[int] = None) -> str:
    """``<base>-<epoch millis>``; raises when the name has no usable characters."""
    # NFKD can expand characters ("㎉" -> "kcal"); keep the slug inside its column
    base = slug_base(name)[:SLUG_BASE_MAX_LENGTH].rstrip("-")
    if not base.strip("-_"):
        raise ValidationException(
            "Restaurant name must contain at least one letter or digit",
            details={"field": "name"},
        )
    suffix = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{base}-{suffix}"


def public_menu_url(slug: str) -> str:
    return f"{settings.CLIENT_URL.rstrip('/')}/menu/{slug}"


def to_read(repo: RestaurantRepository, restaurant: Restaurant, with_counts: bool = False) -> RestaurantRead:
    read = RestaurantRead.model_validate(restaurant)
    if with_counts:
        read.category_count, read.menu_item_count = repo.get_counts(restaurant.id)
    return read


def list_owner_restaurants(repo: RestaurantRepository, user: User) -> list[RestaurantRead]:
    return [to_read(repo, r, with_counts=True) for r in repo.list_active_for_owner(user.id)]


def create_restaurant(repo: RestaurantRepository, user: User, body: RestaurantCreate) -> Restaurant:
    data = body.model_dump(mode="json")
    data["slug"] = generate_slug(body.name)
    data["owner_id"] = user.id

    try:
        restaurant = repo.create_with_categories(data, DEFAULT_CATEGORIES)
    except IntegrityError as exc:
        raise ValidationException("Restaurant with this slug already exists") from exc

    logger.info("Restaurant created", restaurant_id=restaurant.id, slug=restaurant.slug, owner_id=user.id)
    return restaurant


def update_restaurant(repo: RestaurantRepository, restaurant: Restaurant, body: RestaurantUpdate) -> Restaurant:
    # slug and owner are not part of RestaurantUpdate
    data = body.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    return repo.update(restaurant, data)


def delete_restaurant(repo: RestaurantRepository, restaurant: Restaurant) -> None:
    repo.soft_delete(restaurant)
    logger.info("Restaurant deactivated", restaurant_id=restaurant.id)


def toggle_publish(repo: RestaurantRepository, restaurant: Restaurant) -> Restaurant:
    """Draft <-> Published. Publishing an empty menu is allowed."""
    restaurant = repo.toggle_publish(restaurant)
    logger.info("Publication toggled", restaurant_id=restaurant.id, is_published=restaurant.is_published)
    return restaurant


def get_analytics(menu_repo: MenuRepository, restaurant: Restaurant) -> RestaurantAnalytics:
    counts = menu_repo.item_counts_by_category(restaurant.id)
    categories = [
        CategoryItemCount(id=c.id, name=c.name, order=c.order, color=c.color, item_count=counts.get(c.id, 0))
        for c in menu_repo.list_categories(restaurant.id)
    ]
    return RestaurantAnalytics(
        total_views=restaurant.total_menu_views,
        total_qr_scans=restaurant.total_qr_scans,
        total_categories=len(categories),
        total_menu_items=menu_repo.count_restaurant_items(restaurant.id, available_only=True),
        popular_items=[PopularItem.model_validate(i) for i in menu_repo.popular_items(restaurant.id, limit=5)],
        categories=categories,
        last_viewed_at=restaurant.last_viewed_at,
    )
