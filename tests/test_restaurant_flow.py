import pytest
from unittest.mock import MagicMock, patch
from infrastructure.api.food_api_client import ApiError
from infrastructure.repositories.sqlite_audit_repository import AuditAction
from use_cases import restaurant_flow
from use_cases.menu_cache import MenuCache, MenuItem

RESTAURANT = {
    "_id": "R1",
    "restaurantName": "Spice Hub",
    "city": "Pune",
    "country": "India",
    "deliveryTime": 30,
    "cuisines": ["Biryani"],
    "imageUrl": "https://img.example.com/r.png",
    "menus": [{"_id": "M1", "name": "Biryani", "description": "Rice", "price": 200}],
}
FIELDS = {"restaurantName": "Spice Hub", "city": "Pune", "country": "India", "deliveryTime": 30, "cuisines": ["Biryani"]}


def test_load_owner_restaurant_fills_menu_cache():
    client = MagicMock()
    client.get_my_restaurant.return_value = RESTAURANT
    cache = MenuCache()

    restaurant = restaurant_flow.load_owner_restaurant(client, cache)

    assert restaurant.restaurant_id == "R1"
    assert [m.menu_id for m in cache.menus] == ["M1"]


def test_load_owner_restaurant_without_restaurant_clears_cache():
    client = MagicMock()
    client.get_my_restaurant.return_value = None
    cache = MenuCache([MenuItem("old", "Old", "", 1.0)])
    assert restaurant_flow.load_owner_restaurant(client, cache) is None
    assert len(cache) == 0


@patch("auth.get_audit_repo")
def test_save_restaurant_creates_then_reloads(mock_get_audit_repo):
    client = MagicMock()
    client.get_my_restaurant.return_value = RESTAURANT
    image = ("r.png", b"data", "image/png")

    restaurant = restaurant_flow.save_restaurant(client, MenuCache(), FIELDS, image, exists=False)

    client.create_restaurant.assert_called_once_with(FIELDS, image)
    client.update_restaurant.assert_not_called()
    assert restaurant.name == "Spice Hub"
    assert mock_get_audit_repo.return_value.log_action.call_args[0][0] == AuditAction.RESTAURANT_CREATE


@patch("auth.get_audit_repo")
def test_save_restaurant_update_allows_missing_image(mock_get_audit_repo):
    client = MagicMock()
    client.get_my_restaurant.return_value = RESTAURANT

    restaurant_flow.save_restaurant(client, MenuCache(), FIELDS, None, exists=True)

    client.update_restaurant.assert_called_once_with(FIELDS, None)
    assert mock_get_audit_repo.return_value.log_action.call_args[0][0] == AuditAction.RESTAURANT_UPDATE


@patch("auth.get_audit_repo")
def test_save_restaurant_create_requires_image(_mock_get_audit_repo):
    client = MagicMock()
    with pytest.raises(ApiError):
        restaurant_flow.save_restaurant(client, MenuCache(), FIELDS, None, exists=False)
    client.create_restaurant.assert_not_called()


@patch("auth.get_audit_repo")
def test_change_order_status_uses_confirmed_status(mock_get_audit_repo):
    client = MagicMock()
    client.update_order_status.return_value = {"success": True, "status": "preparing"}
    orders = [{"_id": "o1", "status": "pending"}, {"_id": "o2", "status": "pending"}]

    updated = restaurant_flow.change_order_status(client, orders, "o1", "preparing")

    assert updated[0]["status"] == "preparing"
    assert updated[1]["status"] == "pending"
    assert orders[0]["status"] == "pending"
    _, kwargs = mock_get_audit_repo.return_value.log_action.call_args
    assert kwargs["metadata"] == {"new_status": "preparing"}


def test_change_order_status_rejects_unknown_status():
    client = MagicMock()
    with pytest.raises(ValueError):
        restaurant_flow.change_order_status(client, [], "o1", "lost")
    client.update_order_status.assert_not_called()
