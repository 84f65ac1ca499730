import json
import pytest
import requests
from requests.cookies import RequestsCookieJar
from unittest.mock import MagicMock
from infrastructure.api.food_api_client import ApiError, FoodApiClient


def _response(status_code=200, payload=None, raw=None):
    resp = MagicMock()
    resp.status_code = status_code
    if raw is not None:
        resp.json.side_effect = ValueError("not json")
    else:
        resp.json.return_value = payload if payload is not None else {}
    return resp


def _client(resp=None, error=None):
    session = MagicMock()
    session.cookies = RequestsCookieJar()
    if error is not None:
        session.request.side_effect = error
    else:
        session.request.return_value = resp
    return FoodApiClient("http://api.test/", timeout=5, session=session), session


def test_login_posts_credentials_to_user_endpoint():
    client, session = _client(_response(200, {"success": True, "user": {"_id": "u1"}}))
    payload = client.login("asha@example.com", "secret1")

    assert payload["user"]["_id"] == "u1"
    session.request.assert_called_once_with(
        "POST", "http://api.test/api/v1/user/login", timeout=5,
        json={"email": "asha@example.com", "password": "secret1"},
    )


def test_http_error_raises_api_error_with_server_message():
    client, _ = _client(_response(400, {"success": False, "message": "Incorrect email or password"}))
    with pytest.raises(ApiError) as exc:
        client.login("asha@example.com", "bad")
    assert exc.value.message == "Incorrect email or password"
    assert exc.value.status_code == 400


def test_success_false_with_ok_status_is_an_error():
    client, _ = _client(_response(200, {"success": False, "message": "User already exist with this email"}))
    with pytest.raises(ApiError) as exc:
        client.signup("Asha", "asha@example.com", "secret1", "9876543210")
    assert exc.value.already_exists


def test_network_error_is_wrapped():
    client, _ = _client(error=requests.ConnectionError("refused"))
    with pytest.raises(ApiError) as exc:
        client.check_auth()
    assert exc.value.status_code is None
    assert "Network error" in exc.value.message


def test_non_json_error_body_uses_status_in_message():
    client, _ = _client(_response(502, raw=True))
    with pytest.raises(ApiError) as exc:
        client.get_orders()
    assert exc.value.message == "HTTP 502"


def test_get_my_restaurant_returns_none_on_404():
    client, _ = _client(_response(404, {"success": False, "message": "Restaurant not found"}))
    assert client.get_my_restaurant() is None


def test_get_my_restaurant_propagates_other_errors():
    client, _ = _client(_response(500, {"success": False, "message": "Internal server error"}))
    with pytest.raises(ApiError):
        client.get_my_restaurant()


def test_create_restaurant_sends_multipart_with_json_cuisines():
    client, session = _client(_response(201, {"success": True}))
    image = ("r.png", b"data", "image/png")
    fields = {"restaurantName": "Spice Hub", "city": "Pune", "country": "India", "deliveryTime": 30, "cuisines": ["Thali"]}

    client.create_restaurant(fields, image)

    _, kwargs = session.request.call_args
    assert kwargs["files"] == {"imageFile": image}
    assert kwargs["data"]["deliveryTime"] == "30"
    assert json.loads(kwargs["data"]["cuisines"]) == ["Thali"]


def test_edit_menu_without_image_sends_no_files():
    client, session = _client(_response(200, {"success": True, "menu": {}}))
    client.edit_menu("M1", {"name": "Dal", "description": "Lentils", "price": 90})
    args, kwargs = session.request.call_args
    assert args == ("PUT", "http://api.test/api/v1/menu/M1")
    assert kwargs["files"] is None
    assert kwargs["data"]["price"] == "90"


def test_search_all_with_filters():
    client, session = _client(_response(200, {"success": True, "data": []}))
    client.search_restaurants("", "biryani", ["Thali", "Momos"])
    args, kwargs = session.request.call_args
    assert args[1] == "http://api.test/api/v1/restaurant/search/all"
    assert kwargs["params"] == {"searchQuery": "biryani", "selectedCuisines": "Thali,Momos"}


def test_search_by_text_without_filters_sends_no_params():
    client, session = _client(_response(200, {"success": True, "data": []}))
    client.search_restaurants("Pune")
    args, kwargs = session.request.call_args
    assert args[1] == "http://api.test/api/v1/restaurant/search/Pune"
    assert kwargs["params"] is None


def test_logout_clears_cookies_even_on_failure():
    client, _ = _client(error=requests.Timeout("slow"))
    client.set_session_token("jwt-token")
    assert client.session_token == "jwt-token"
    with pytest.raises(ApiError):
        client.logout()
    assert client.session_token is None


def test_list_endpoints_unwrap_collections():
    client, _ = _client(_response(200, {"success": True, "orders": [{"_id": "o1"}]}))
    assert client.get_orders() == [{"_id": "o1"}]
    assert client.get_restaurant_orders() == [{"_id": "o1"}]


def test_checkout_session_endpoint():
    client, session = _client(_response(200, {"session": {"url": "https://pay"}}))
    client.create_checkout_session({"cartItems": []})
    args, _ = session.request.call_args
    assert args == ("POST", "http://api.test/api/v1/order/checkout/create-checkout-session")
