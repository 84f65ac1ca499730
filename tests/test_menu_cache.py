from use_cases.menu_cache import DEFAULT_CATEGORY, MenuCache, MenuItem


def _menu(menu_id, name="Soup", price=120.0):
    return MenuItem(menu_id=menu_id, name=name, description="Hot", price=price)


def test_delete_absent_menu_is_noop():
    cache = MenuCache([_menu("M1")])
    cache.delete_menu("M2")
    assert [m.menu_id for m in cache.menus] == ["M1"]


def test_insert_appends_and_replaces_existing_id():
    cache = MenuCache()
    cache.insert_menu(_menu("M1"))
    cache.insert_menu(_menu("M2", name="Salad"))
    cache.insert_menu(_menu("M1", name="Tomato soup"))
    assert len(cache) == 2
    assert cache.get("M1").name == "Tomato soup"


def test_replace_absent_menu_is_noop():
    cache = MenuCache([_menu("M1")])
    cache.replace_menu(_menu("M9", name="Ghost"))
    assert len(cache) == 1
    assert cache.get("M9") is None


def test_replace_is_idempotent():
    cache = MenuCache([_menu("M1")])
    updated = _menu("M1", price=150.0)
    cache.replace_menu(updated)
    cache.replace_menu(updated)
    assert cache.menus == (updated,)


def test_load_replaces_contents():
    cache = MenuCache([_menu("M1")])
    cache.load([_menu("M2"), _menu("M3")])
    assert [m.menu_id for m in cache.menus] == ["M2", "M3"]
    cache.clear()
    assert len(cache) == 0


def test_menu_item_from_payload_defaults():
    menu = MenuItem.from_payload({"_id": "abc", "name": "Dal", "description": "Lentils", "price": "90"})
    assert menu.menu_id == "abc"
    assert menu.price == 90.0
    assert menu.category == DEFAULT_CATEGORY
    assert menu.is_available is True
    assert menu.is_vegetarian is False
