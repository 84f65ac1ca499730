from services import restaurant_service


def test_normalize_restaurant_fills_defaults():
    restaurant = restaurant_service.normalize_restaurant({
        "_id": "R1",
        "restaurantName": "Spice Hub",
        "city": "Pune",
        "country": "India",
        "deliveryTime": "35",
        "cuisines": ["Thali", "Biryani"],
        "menus": [{"_id": "M1", "name": "Thali", "price": 150}, "not-a-menu"],
    })
    assert restaurant.delivery_time == 35
    assert restaurant.location == "Pune, India"
    assert restaurant.rating == restaurant_service.DEFAULT_RATING
    assert restaurant.opening_hours == restaurant_service.DEFAULT_OPENING_HOURS
    assert restaurant.cuisines == ("Thali", "Biryani")
    assert [m.menu_id for m in restaurant.menus] == ["M1"]


def test_normalize_restaurant_bad_delivery_time():
    restaurant = restaurant_service.normalize_restaurant({"_id": "R1", "deliveryTime": "soon"})
    assert restaurant.delivery_time == 0
    assert restaurant.location == ""


def test_parse_search_result():
    payload = {"data": [{"_id": "R1", "restaurantName": "A"}], "totalCount": 12, "hasMore": True}
    restaurants, total, has_more = restaurant_service.parse_search_result(payload)
    assert [r.restaurant_id for r in restaurants] == ["R1"]
    assert total == 12
    assert has_more is True


def test_parse_search_result_without_count():
    restaurants, total, has_more = restaurant_service.parse_search_result({"data": [{"_id": "R1"}, {"_id": "R2"}]})
    assert total == 2
    assert has_more is False


def test_toggle_filter():
    applied = restaurant_service.toggle_filter([], "Momos")
    assert applied == ["Momos"]
    assert restaurant_service.toggle_filter(applied, "Momos") == []
