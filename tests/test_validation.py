import pytest
from services import validation


def test_login_validation():
    assert validation.validate_login({"email": "asha@example.com", "password": "secret1"}) == []
    errors = validation.validate_login({"email": "not-an-email", "password": "123"})
    assert "Invalid email address" in errors
    assert "Password must be at least 6 characters." in errors


def test_signup_requires_fullname_and_ten_digit_contact():
    errors = validation.validate_signup(
        {"fullname": " ", "email": "asha@example.com", "password": "secret1", "contact": "12345"}
    )
    assert errors == ["Fullname is required", "Contact number must be exactly 10 digits"]


def test_signup_contact_must_be_digits():
    errors = validation.validate_signup(
        {"fullname": "Asha", "email": "asha@example.com", "password": "secret1", "contact": "98765abcde"}
    )
    assert errors == ["Contact number must contain only digits"]


@pytest.mark.parametrize("code,ok", [("123456", True), (" 123456 ", True), ("12345", False), (None, False)])
def test_verification_code_length(code, ok):
    assert (validation.validate_verification_code(code) == []) is ok


def test_delivery_requires_address_fields_but_email_is_optional():
    form = {"name": "Asha", "email": "", "contact": "9876543210", "address": "", "city": "Pune", "country": ""}
    assert validation.validate_delivery(form) == ["Delivery address is required", "Delivery country is required"]
    assert "Invalid email address" in validation.validate_delivery({**form, "email": "bad", "address": "x", "country": "y"})


def test_menu_validation():
    form = {"name": "Dal", "description": "Lentils", "price": 90, "image": ("d.png", b"", "image/png")}
    assert validation.validate_menu(form) == []
    assert validation.validate_menu({**form, "image": None}) == ["Image is required"]
    assert validation.validate_menu({**form, "image": None}, image_required=False) == []
    assert validation.validate_menu({**form, "price": 0}) == ["Price must be greater than 0"]
    assert validation.validate_menu({**form, "price": "abc"}) == ["Price must be a number"]


def test_restaurant_validation():
    form = {
        "restaurantName": "Spice Hub", "city": "Pune", "country": "India",
        "deliveryTime": 30, "cuisines": ["Thali"], "image": None,
    }
    assert validation.validate_restaurant(form, image_required=False) == []
    errors = validation.validate_restaurant({**form, "city": "", "cuisines": [], "deliveryTime": 0})
    assert errors == [
        "City is required",
        "Delivery time must be greater than 0",
        "Add at least one cuisine",
        "Image is required",
    ]


def test_email_only_validation():
    assert validation.validate_email("asha@example.com") == []
    assert validation.validate_email("asha@") == ["Invalid email address"]
