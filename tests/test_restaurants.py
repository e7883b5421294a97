"""
Tests for restaurant management, ownership checks and publication.
"""

import re

from fastapi import status

API = "/api"


class TestRestaurantCreation:
    """Creation, slugs and default categories"""

    def test_slug_is_transliterated_and_suffixed(self, client, owner):
        response = client.post(f"{API}/restaurants", json={"name": "Café Déjà Vu"}, headers=owner["headers"])

        assert response.status_code == status.HTTP_201_CREATED
        restaurant = response.json()["data"]["restaurant"]
        assert re.fullmatch(r"cafe-deja-vu-\d+", restaurant["slug"])
        assert restaurant["owner_id"] == owner["id"]
        assert restaurant["is_published"] is False
        assert restaurant["is_active"] is True

    def test_default_categories_are_seeded(self, client, owner, make_restaurant):
        restaurant = make_restaurant(owner)

        assert restaurant["category_count"] == 4
        categories = client.get(
            f"{API}/menus/restaurants/{restaurant['id']}/categories", headers=owner["headers"]
        ).json()["data"]["categories"]
        assert [c["name"] for c in categories] == ["Appetizers", "Main Course", "Desserts", "Beverages"]
        assert [c["color"] for c in categories] == ["#dc2626", "#059669", "#7c3aed", "#0891b2"]

    def test_name_without_letters_is_rejected(self, client, owner):
        response = client.post(f"{API}/restaurants", json={"name": "!!!"}, headers=owner["headers"])

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["details"]["field"] == "name"

    def test_empty_name_is_rejected(self, client, owner):
        response = client.post(f"{API}/restaurants", json={"name": ""}, headers=owner["headers"])

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_requires_authentication(self, client, db_session):
        response = client.post(f"{API}/restaurants", json={"name": "Anon"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestRestaurantListing:
    """Owner listings and soft delete"""

    def test_lists_only_own_active_restaurants(self, client, owner, other_owner, make_restaurant):
        first = make_restaurant(owner, "First")
        second = make_restaurant(owner, "Second")
        make_restaurant(other_owner, "Not Mine")

        client.delete(f"{API}/restaurants/{first['id']}", headers=owner["headers"])

        response = client.get(f"{API}/restaurants", headers=owner["headers"])
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["count"] == 1
        assert [r["id"] for r in body["data"]["restaurants"]] == [second["id"]]

    def test_update_ignores_slug_and_owner(self, client, owner, make_restaurant):
        restaurant = make_restaurant(owner)

        response = client.put(
            f"{API}/restaurants/{restaurant['id']}",
            json={"name": "Renamed", "slug": "hijacked", "owner_id": 999},
            headers=owner["headers"],
        )

        assert response.status_code == status.HTTP_200_OK
        updated = response.json()["data"]["restaurant"]
        assert updated["name"] == "Renamed"
        assert updated["slug"] == restaurant["slug"]
        assert updated["owner_id"] == owner["id"]

    def test_unknown_restaurant(self, client, owner):
        response = client.get(f"{API}/restaurants/12345", headers=owner["headers"])

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Restaurant not found."


class TestOwnershipAuthorization:
    """Owners manage their own restaurants, admins manage all"""

    def test_foreign_owner_cannot_toggle(self, client, owner, other_owner, make_restaurant):
        restaurant = make_restaurant(owner)

        response = client.put(
            f"{API}/restaurants/{restaurant['id']}/toggle-publish", headers=other_owner["headers"]
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "You can only access your own restaurants."
        unchanged = client.get(f"{API}/restaurants/{restaurant['id']}", headers=owner["headers"])
        assert unchanged.json()["data"]["restaurant"]["is_published"] is False

    def test_foreign_owner_cannot_read_update_or_delete(self, client, owner, other_owner, make_restaurant):
        restaurant = make_restaurant(owner)
        url = f"{API}/restaurants/{restaurant['id']}"

        assert client.get(url, headers=other_owner["headers"]).status_code == status.HTTP_403_FORBIDDEN
        assert client.put(url, json={"name": "Mine"}, headers=other_owner["headers"]).status_code == 403
        assert client.delete(url, headers=other_owner["headers"]).status_code == status.HTTP_403_FORBIDDEN

    def test_admin_can_manage_any_restaurant(self, client, owner, admin, make_restaurant):
        restaurant = make_restaurant(owner)

        response = client.put(f"{API}/restaurants/{restaurant['id']}/toggle-publish", headers=admin["headers"])

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["restaurant"]["is_published"] is True


class TestPublication:
    """Draft/Published toggling"""

    def test_toggle_twice_restores_state(self, client, owner, make_restaurant):
        restaurant = make_restaurant(owner)
        url = f"{API}/restaurants/{restaurant['id']}/toggle-publish"

        first = client.put(url, headers=owner["headers"])
        second = client.put(url, headers=owner["headers"])

        assert first.json()["data"]["restaurant"]["is_published"] is True
        assert first.json()["message"] == "Restaurant published successfully"
        assert second.json()["data"]["restaurant"]["is_published"] is False
        assert second.json()["data"]["restaurant"]["slug"] == restaurant["slug"]

    def test_empty_menu_can_be_published(self, client, owner, make_restaurant):
        restaurant = make_restaurant(owner, publish=True)

        assert restaurant["is_published"] is True


class TestRestaurantAnalytics:
    """Analytics and owner menu preview"""

    def test_analytics_counts(self, client, owner, make_restaurant):
        restaurant = make_restaurant(owner, publish=True)
        headers = owner["headers"]
        categories = client.get(
            f"{API}/menus/restaurants/{restaurant['id']}/categories", headers=headers
        ).json()["data"]["categories"]
        for name in ("Soup", "Salad"):
            client.post(
                f"{API}/menus/restaurants/{restaurant['id']}/items",
                json={"name": name, "price": 5, "category_id": categories[0]["id"]},
                headers=headers,
            )
        client.post(f"{API}/qr/scan/{restaurant['slug']}")
        client.get(f"{API}/menus/public/{restaurant['slug']}")

        response = client.get(f"{API}/restaurants/{restaurant['id']}/analytics", headers=headers)

        assert response.status_code == status.HTTP_200_OK
        analytics = response.json()["data"]["analytics"]
        assert analytics["total_views"] == 1
        assert analytics["total_qr_scans"] == 1
        assert analytics["total_categories"] == 4
        assert analytics["total_menu_items"] == 2
        assert analytics["categories"][0]["item_count"] == 2
        assert len(analytics["popular_items"]) == 2
        assert analytics["last_viewed_at"] is not None

    def test_owner_preview_does_not_count_views(self, client, owner, make_restaurant):
        restaurant = make_restaurant(owner)

        response = client.get(f"{API}/restaurants/{restaurant['id']}/menus", headers=owner["headers"])

        assert response.status_code == status.HTTP_200_OK
        menus = response.json()["data"]["menus"]
        assert len(menus) == 1
        assert menus[0]["id"] == f"menu_{restaurant['id']}"
        assert len(menus[0]["categories"]) == 4
        after = client.get(f"{API}/restaurants/{restaurant['id']}", headers=owner["headers"])
        assert after.json()["data"]["restaurant"]["total_menu_views"] == 0
