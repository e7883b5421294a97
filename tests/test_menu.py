"""
Tests for categories, menu items and the public menu.
"""

import pytest
from fastapi import status

API = "/api"


@pytest.fixture
def restaurant(owner, make_restaurant):
    return make_restaurant(owner, "Trattoria Uno")


@pytest.fixture
def categories(client, owner, restaurant):
    response = client.get(f"{API}/menus/restaurants/{restaurant['id']}/categories", headers=owner["headers"])
    return response.json()["data"]["categories"]


@pytest.fixture
def create_item(client, owner, restaurant, categories):
    def _create(**fields):
        payload = {"name": "Bruschetta", "price": 8.5, "category_id": categories[0]["id"], **fields}
        response = client.post(
            f"{API}/menus/restaurants/{restaurant['id']}/items", json=payload, headers=owner["headers"]
        )
        assert response.status_code == status.HTTP_201_CREATED, response.text
        return response.json()["data"]["item"]

    return _create


class TestCategories:
    """Category CRUD"""

    def test_create_and_update_category(self, client, owner, restaurant):
        created = client.post(
            f"{API}/menus/restaurants/{restaurant['id']}/categories",
            json={"name": "Specials", "order": 5, "color": "#123abc"},
            headers=owner["headers"],
        )
        assert created.status_code == status.HTTP_201_CREATED
        category = created.json()["data"]["category"]
        assert category["restaurant_id"] == restaurant["id"]

        updated = client.put(
            f"{API}/menus/categories/{category['id']}",
            json={"name": "Chef Specials"},
            headers=owner["headers"],
        )
        assert updated.status_code == status.HTTP_200_OK
        assert updated.json()["data"]["category"]["name"] == "Chef Specials"
        assert updated.json()["data"]["category"]["color"] == "#123abc"

    def test_invalid_color_is_rejected(self, client, owner, restaurant):
        response = client.post(
            f"{API}/menus/restaurants/{restaurant['id']}/categories",
            json={"name": "Specials", "color": "red"},
            headers=owner["headers"],
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_category_with_available_items_cannot_be_deleted(self, client, owner, categories, create_item):
        item = create_item()
        category_url = f"{API}/menus/categories/{categories[0]['id']}"

        refused = client.delete(category_url, headers=owner["headers"])
        assert refused.status_code == status.HTTP_400_BAD_REQUEST

        client.delete(f"{API}/menus/items/{item['id']}", headers=owner["headers"])
        deleted = client.delete(category_url, headers=owner["headers"])
        assert deleted.status_code == status.HTTP_200_OK

    def test_deleted_category_leaves_listing(self, client, owner, restaurant, categories):
        client.delete(f"{API}/menus/categories/{categories[-1]['id']}", headers=owner["headers"])

        response = client.get(f"{API}/menus/restaurants/{restaurant['id']}/categories", headers=owner["headers"])

        assert [c["id"] for c in response.json()["data"]["categories"]] == [c["id"] for c in categories[:-1]]

    def test_foreign_owner_cannot_edit_category(self, client, other_owner, categories):
        response = client.put(
            f"{API}/menus/categories/{categories[0]['id']}",
            json={"name": "Mine now"},
            headers=other_owner["headers"],
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestMenuItems:
    """Menu item CRUD and derived fields"""

    def test_derived_fields(self, create_item):
        item = create_item(
            price=15,
            original_price=20,
            images=[{"url": "http://img/1.jpg"}, {"url": "http://img/2.jpg", "is_primary": True}],
            tags=["Spicy", "House"],
        )

        assert item["is_on_sale"] is True
        assert item["discount_percentage"] == 25
        assert item["image"] == "http://img/2.jpg"
        assert item["tags"] == ["spicy", "house"]

    def test_item_without_discount(self, create_item):
        item = create_item(price=10)

        assert item["is_on_sale"] is False
        assert item["discount_percentage"] == 0
        assert item["image"] is None

    def test_category_must_belong_to_restaurant(self, client, owner, other_owner, make_restaurant, restaurant):
        foreign = make_restaurant(other_owner, "Other Place")
        foreign_category = client.get(
            f"{API}/menus/restaurants/{foreign['id']}/categories", headers=other_owner["headers"]
        ).json()["data"]["categories"][0]

        response = client.post(
            f"{API}/menus/restaurants/{restaurant['id']}/items",
            json={"name": "Smuggled", "price": 1, "category_id": foreign_category["id"]},
            headers=owner["headers"],
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_negative_price_is_rejected(self, client, owner, restaurant, categories):
        response = client.post(
            f"{API}/menus/restaurants/{restaurant['id']}/items",
            json={"name": "Free money", "price": -1, "category_id": categories[0]["id"]},
            headers=owner["headers"],
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_filters(self, client, owner, restaurant, categories, create_item):
        create_item(name="Soup")
        create_item(name="Cake", category_id=categories[2]["id"])
        create_item(name="Old Cake", category_id=categories[2]["id"], is_available=False)
        url = f"{API}/menus/restaurants/{restaurant['id']}/items"

        by_category = client.get(url, params={"category": categories[2]["id"]}, headers=owner["headers"])
        available = client.get(url, params={"available": "true"}, headers=owner["headers"])

        assert {i["name"] for i in by_category.json()["data"]["items"]} == {"Cake", "Old Cake"}
        assert {i["name"] for i in available.json()["data"]["items"]} == {"Soup", "Cake"}

    def test_update_and_delete_item(self, client, owner, create_item):
        item = create_item()
        url = f"{API}/menus/items/{item['id']}"

        updated = client.put(url, json={"price": 9.75, "is_popular": True}, headers=owner["headers"])
        assert updated.status_code == status.HTTP_200_OK
        assert updated.json()["data"]["item"]["price"] == 9.75
        assert updated.json()["data"]["item"]["is_popular"] is True

        assert client.delete(url, headers=owner["headers"]).status_code == status.HTTP_200_OK
        assert client.get(url, headers=owner["headers"]).status_code == status.HTTP_404_NOT_FOUND

    def test_foreign_owner_cannot_read_item(self, client, other_owner, create_item):
        item = create_item()

        response = client.get(f"{API}/menus/items/{item['id']}", headers=other_owner["headers"])

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestPublicMenu:
    """Anonymous menu access"""

    def test_draft_menu_is_not_public(self, client, restaurant):
        response = client.get(f"{API}/menus/public/{restaurant['slug']}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Restaurant menu not found or not published"

    def test_published_menu_shows_available_items_and_counts_views(
        self, client, owner, restaurant, categories, create_item
    ):
        create_item(name="Soup")
        create_item(name="Hidden", is_available=False)
        client.put(f"{API}/restaurants/{restaurant['id']}/toggle-publish", headers=owner["headers"])

        response = client.get(f"{API}/menus/public/{restaurant['slug']}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["restaurant"]["slug"] == restaurant["slug"]
        assert "owner_id" not in data["restaurant"]
        first = data["categories"][0]
        assert [i["name"] for i in first["items"]] == ["Soup"]

        current = client.get(f"{API}/restaurants/{restaurant['id']}", headers=owner["headers"])
        assert current.json()["data"]["restaurant"]["total_menu_views"] == 1

    def test_lookup_by_id_or_slug(self, client, owner, restaurant):
        client.put(f"{API}/restaurants/{restaurant['id']}/toggle-publish", headers=owner["headers"])

        by_id = client.get(f"{API}/menus/public/restaurant/{restaurant['id']}")
        by_slug = client.get(f"{API}/menus/public/restaurant/{restaurant['slug']}")

        assert by_id.status_code == status.HTTP_200_OK
        assert by_slug.status_code == status.HTTP_200_OK
        assert by_id.json()["data"]["restaurant"]["id"] == restaurant["id"]

    def test_invalid_token_is_ignored(self, client, owner, restaurant):
        client.put(f"{API}/restaurants/{restaurant['id']}/toggle-publish", headers=owner["headers"])

        response = client.get(
            f"{API}/menus/public/{restaurant['slug']}",
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_deleted_restaurant_is_not_public(self, client, owner, restaurant):
        client.put(f"{API}/restaurants/{restaurant['id']}/toggle-publish", headers=owner["headers"])
        client.delete(f"{API}/restaurants/{restaurant['id']}", headers=owner["headers"])

        response = client.get(f"{API}/menus/public/{restaurant['slug']}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
