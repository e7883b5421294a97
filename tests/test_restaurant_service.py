"""
Unit tests for slug generation and the ownership rule.
"""

import re

import pytest

from smartdine.application.services.restaurant_service import (
    SLUG_BASE_MAX_LENGTH,
    authorize_restaurant_access,
    can_manage,
    generate_slug,
    public_menu_url,
    slug_base,
)
from smartdine.core.exceptions import ForbiddenException, ValidationException
from smartdine.domain.models.restaurant import Restaurant
from smartdine.domain.models.user import User, UserRole


class TestSlugGeneration:
    """generate_slug / slug_base"""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Café Déjà Vu", "cafe-deja-vu"),
            ("  Joe's   Diner ", "joes-diner"),
            ("Fish & Chips", "fish-chips"),
            ("Noodle_Bar 2", "noodle_bar-2"),
        ],
    )
    def test_slug_base(self, name, expected):
        assert slug_base(name) == expected

    def test_suffix_is_epoch_millis(self):
        assert generate_slug("Café Déjà Vu", now_ms=1700000000000) == "cafe-deja-vu-1700000000000"

    def test_default_suffix_is_numeric(self):
        assert re.fullmatch(r"pizza-\d{13}", generate_slug("Pizza"))

    def test_expanding_characters_are_capped(self):
        slug = generate_slug("㎉" * 100, now_ms=1700000000000)

        base, suffix = slug.rsplit("-", 1)
        assert len(base) == SLUG_BASE_MAX_LENGTH
        assert base == "kcal" * 25
        assert suffix == "1700000000000"
        assert len(slug) <= Restaurant.__table__.c.slug.type.length

    def test_cap_does_not_leave_trailing_hyphen(self):
        slug = generate_slug("a" * 99 + " b", now_ms=1)

        assert slug == "a" * 99 + "-1"

    @pytest.mark.parametrize("name", ["!!!", "東京", "   ", "---"])
    def test_names_without_usable_characters_are_rejected(self, name):
        with pytest.raises(ValidationException):
            generate_slug(name)

    def test_public_menu_url(self):
        assert public_menu_url("cafe-1") == "http://localhost:3000/menu/cafe-1"


class TestOwnershipRule:
    """can_manage / authorize_restaurant_access"""

    def test_owner_manages_own_restaurant(self):
        user = User(id=1, role=UserRole.OWNER)

        assert can_manage(user, Restaurant(id=10, owner_id=1))

    def test_owner_cannot_manage_foreign_restaurant(self):
        user = User(id=1, role=UserRole.OWNER)

        with pytest.raises(ForbiddenException):
            authorize_restaurant_access(user, Restaurant(id=10, owner_id=2))

    def test_admin_manages_any_restaurant(self):
        user = User(id=1, role=UserRole.ADMIN)

        authorize_restaurant_access(user, Restaurant(id=10, owner_id=2))
