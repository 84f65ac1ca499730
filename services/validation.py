"""Form validation for auth, checkout and menu forms. Each validator returns a list of messages."""

import re
from typing import Any, Dict, List, Mapping

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6
CONTACT_LENGTH = 10
VERIFICATION_CODE_LENGTH = 6


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def _check_email(email: Any, errors: List[str]) -> None:
    if _blank(email) or not EMAIL_RE.match(str(email).strip()):
        errors.append("Invalid email address")


def _check_password(password: Any, errors: List[str]) -> None:
    if password is None or len(str(password)) < MIN_PASSWORD_LENGTH:
        errors.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")


def _check_contact(contact: Any, errors: List[str]) -> None:
    value = "" if contact is None else str(contact).strip()
    if len(value) != CONTACT_LENGTH:
        errors.append(f"Contact number must be exactly {CONTACT_LENGTH} digits")
    elif not value.isdigit():
        errors.append("Contact number must contain only digits")


def validate_email(email: Any) -> List[str]:
    errors: List[str] = []
    _check_email(email, errors)
    return errors


def validate_login(form: Mapping[str, Any]) -> List[str]:
    errors: List[str] = []
    _check_email(form.get("email"), errors)
    _check_password(form.get("password"), errors)
    return errors


def validate_signup(form: Mapping[str, Any]) -> List[str]:
    errors: List[str] = []
    if _blank(form.get("fullname")):
        errors.append("Fullname is required")
    _check_email(form.get("email"), errors)
    _check_password(form.get("password"), errors)
    _check_contact(form.get("contact"), errors)
    return errors


def validate_verification_code(code: Any) -> List[str]:
    value = "" if code is None else str(code).strip()
    if len(value) != VERIFICATION_CODE_LENGTH:
        return [f"Verification code must have {VERIFICATION_CODE_LENGTH} characters"]
    return []


def validate_delivery(form: Mapping[str, Any]) -> List[str]:
    errors: List[str] = []
    for field in ("name", "contact", "address", "city", "country"):
        if _blank(form.get(field)):
            errors.append(f"Delivery {field} is required")
    if not _blank(form.get("email")):
        _check_email(form.get("email"), errors)
    return errors


def validate_menu(form: Mapping[str, Any], image_required: bool = True) -> List[str]:
    errors: List[str] = []
    if _blank(form.get("name")):
        errors.append("Name is required")
    if _blank(form.get("description")):
        errors.append("Description is required")
    try:
        if float(form.get("price") or 0) <= 0:
            errors.append("Price must be greater than 0")
    except (TypeError, ValueError):
        errors.append("Price must be a number")
    if image_required and form.get("image") is None:
        errors.append("Image is required")
    return errors


def validate_restaurant(form: Dict[str, Any], image_required: bool = True) -> List[str]:
    errors: List[str] = []
    for field, label in (("restaurantName", "Restaurant name"), ("city", "City"), ("country", "Country")):
        if _blank(form.get(field)):
            errors.append(f"{label} is required")
    try:
        if int(form.get("deliveryTime") or 0) <= 0:
            errors.append("Delivery time must be greater than 0")
    except (TypeError, ValueError):
        errors.append("Delivery time must be a whole number of minutes")
    if not form.get("cuisines"):
        errors.append("Add at least one cuisine")
    if image_required and form.get("image") is None:
        errors.append("Image is required")
    return errors
