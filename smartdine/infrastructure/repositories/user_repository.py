"""
SQLAlchemy Implementation of User Repository.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func

from smartdine.domain.models.user import User
from smartdine.domain.repositories.user_repository import UserRepository
from smartdine.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    def get_by_reset_token(self, token_digest: str, now: datetime) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(
                User.password_reset_token == token_digest,
                User.password_reset_expires > now,
            )
            .first()
        )

    def get_by_verification_token(self, token_digest: str, now: datetime) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(
                User.email_verification_token == token_digest,
                User.email_verification_expires > now,
            )
            .first()
        )

    def save(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
