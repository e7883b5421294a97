"""
User Repository Interface.
Credential store operations used by the authentication layer.
"""

from datetime import datetime
from typing import Optional

from smartdine.domain.repositories.base import BaseRepository
from smartdine.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup by email."""
        ...

    def get_by_reset_token(self, token_digest: str, now: datetime) -> Optional[User]:
        """User holding an unexpired password-reset token digest."""
        ...

    def get_by_verification_token(self, token_digest: str, now: datetime) -> Optional[User]:
        """User holding an unexpired email-verification token digest."""
        ...

    def save(self, user: User) -> User:
        """Persist pending attribute changes."""
        ...
