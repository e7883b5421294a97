"""FastAPI dependencies — authentication gate and ownership authorization.

Resolved objects are also exposed on ``request.state.user`` and
``request.state.restaurant`` for handlers that work with the raw request.
"""

from typing import Optional

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from smartdine.application.services.restaurant_service import authorize_restaurant_access
from smartdine.application.services.token_service import (
    TokenExpired,
    TokenMalformed,
    TokenService,
    get_token_service,
)
from smartdine.core.exceptions import (
    AccountDeactivatedException,
    EntityNotFoundException,
    ForbiddenException,
    UnauthorizedException,
)
from smartdine.domain.models.menu import Category, MenuItem
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.models.user import User
from smartdine.domain.repositories.menu_repository import MenuRepository
from smartdine.domain.repositories.restaurant_repository import RestaurantRepository
from smartdine.domain.repositories.user_repository import UserRepository
from smartdine.interfaces.deps import get_menu_repository, get_restaurant_repository, get_user_repository

logger = structlog.get_logger(__name__)

# auto_error=False: a missing header must produce our own 401 body
security = HTTPBearer(auto_error=False)


def _resolve_user(
    credentials: Optional[HTTPAuthorizationCredentials],
    tokens: TokenService,
    users: UserRepository,
) -> User:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Access denied. No token provided.")

    try:
        claims = tokens.verify(credentials.credentials)
    except TokenExpired:
        raise UnauthorizedException("Token has expired.")
    except TokenMalformed:
        raise UnauthorizedException("Invalid token.")

    # live lookup: the token alone does not prove the account still exists
    user = users.get_by_id(claims.user_id)
    if user is None:
        raise UnauthorizedException("The user belonging to this token no longer exists.")
    if not user.is_active:
        raise AccountDeactivatedException()
    return user


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """Extract and validate the current user from the bearer token."""
    try:
        user = _resolve_user(credentials, tokens, users)
    except UnauthorizedException as exc:
        logger.info("Authentication rejected", reason=exc.message, path=request.url.path)
        raise
    request.state.user = user
    return user


def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
    users: UserRepository = Depends(get_user_repository),
) -> Optional[User]:
    """Like get_current_user, but any failure just means 'anonymous'."""
    try:
        user = _resolve_user(credentials, tokens, users)
    except UnauthorizedException:
        user = None
    request.state.user = user
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Require admin role."""
    if not user.is_admin:
        raise ForbiddenException("You do not have permission to perform this action.")
    return user


def get_owned_restaurant(
    restaurant_id: int,
    request: Request,
    user: User = Depends(get_current_user),
    repo: RestaurantRepository = Depends(get_restaurant_repository),
) -> Restaurant:
    """Load the path restaurant and check the caller may manage it."""
    restaurant = repo.get_by_id(restaurant_id)
    if restaurant is None:
        raise EntityNotFoundException("Restaurant not found.")
    authorize_restaurant_access(user, restaurant)
    request.state.restaurant = restaurant
    return restaurant


def get_owned_category(
    category_id: int,
    request: Request,
    user: User = Depends(get_current_user),
    menu_repo: MenuRepository = Depends(get_menu_repository),
) -> Category:
    category = menu_repo.get_category(category_id)
    if category is None:
        raise EntityNotFoundException("Category not found")
    authorize_restaurant_access(user, category.restaurant)
    request.state.restaurant = category.restaurant
    return category


def get_owned_menu_item(
    item_id: int,
    request: Request,
    user: User = Depends(get_current_user),
    menu_repo: MenuRepository = Depends(get_menu_repository),
) -> MenuItem:
    item = menu_repo.get_item(item_id)
    if item is None:
        raise EntityNotFoundException("Menu item not found")
    authorize_restaurant_access(user, item.restaurant)
    request.state.restaurant = item.restaurant
    return item
