"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.models.user import User
from smartdine.domain.repositories.menu_repository import MenuRepository
from smartdine.domain.repositories.restaurant_repository import RestaurantRepository
from smartdine.domain.repositories.user_repository import UserRepository
from smartdine.infrastructure.database import get_db
from smartdine.infrastructure.repositories.menu_repository import SQLAlchemyMenuRepository
from smartdine.infrastructure.repositories.restaurant_repository import SQLAlchemyRestaurantRepository
from smartdine.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_restaurant_repository(db: Session = Depends(get_db)) -> RestaurantRepository:
    """Get restaurant repository instance."""
    return SQLAlchemyRestaurantRepository(db, Restaurant)


def get_menu_repository(db: Session = Depends(get_db)) -> MenuRepository:
    """Get menu repository instance."""
    return SQLAlchemyMenuRepository(db)
