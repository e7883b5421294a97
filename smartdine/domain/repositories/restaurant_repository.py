"""
Restaurant Repository Interface.
Ownership listings, publication state and the atomic tracking counters.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from smartdine.domain.repositories.base import BaseRepository
from smartdine.domain.models.restaurant import Restaurant


class RestaurantRepository(BaseRepository[Restaurant]):
    """Interface for Restaurant-specific operations."""

    def list_active_for_owner(self, owner_id: int) -> List[Restaurant]:
        """Active restaurants of an owner, newest first."""
        ...

    def get_counts(self, restaurant_id: int) -> Tuple[int, int]:
        """(active categories, menu items) for a restaurant."""
        ...

    def create_with_categories(self, data: Dict[str, Any], categories: List[Dict[str, Any]]) -> Restaurant:
        """Insert a restaurant and its seed categories in one transaction."""
        ...

    def get_published_by_slug(self, slug: str) -> Optional[Restaurant]:
        """Active and published restaurant with this slug."""
        ...

    def get_published_by_id_or_slug(self, value: str) -> Optional[Restaurant]:
        """Active and published restaurant matching a numeric id or a slug."""
        ...

    def soft_delete(self, restaurant: Restaurant) -> Restaurant:
        """Flip is_active off."""
        ...

    def toggle_publish(self, restaurant: Restaurant) -> Restaurant:
        """Negate is_published in a single statement."""
        ...

    def save_qr_code(self, restaurant: Restaurant, code: str, public_url: str, generated_at: datetime) -> Restaurant:
        """Store a rendered QR artifact without touching the scan counter."""
        ...

    def increment_qr_scans(self, slug: str) -> bool:
        """Atomically bump scan counters of an active, published restaurant.

        Returns False when no such restaurant exists.
        """
        ...

    def increment_views(self, restaurant_id: int, viewed_at: datetime) -> None:
        """Atomically bump the menu view counter."""
        ...
