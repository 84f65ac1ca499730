"""Checkout: hand the cart to the payment session endpoint and clear it only on success."""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from infrastructure.api.food_api_client import ApiError, FoodApiClient
from infrastructure.repositories.sqlite_audit_repository import AuditAction
from services import validation
from use_cases.cart import Cart, CartError
from use_cases.session_models import Identity

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryDetails:
    name: str
    email: str
    contact: str
    address: str
    city: str
    country: str

    @classmethod
    def from_identity(cls, identity: Optional[Identity]) -> "DeliveryDetails":
        if identity is None:
            return cls("", "", "", "", "", "")
        return cls(
            name=identity.fullname,
            email=identity.email,
            contact=identity.contact,
            address=identity.address,
            city=identity.city,
            country=identity.country,
        )


@dataclass(frozen=True)
class CheckoutResult:
    url: str
    restaurant_id: str
    grand_total: float


def build_checkout_request(cart: Cart, delivery: DeliveryDetails, now: Optional[datetime] = None) -> Dict[str, Any]:
    if cart.is_empty():
        raise CartError("Cart is empty")
    return {
        "cartItems": [
            {
                "menuId": item.item_id,
                "name": item.name,
                "image": item.image,
                "price": item.unit_price,
                "quantity": item.quantity,
            }
            for item in cart.items
        ],
        "deliveryDetails": asdict(delivery),
        "restaurantId": cart.active_restaurant_id,
        "createdAt": (now or datetime.now(timezone.utc)).isoformat(),
    }


def start_checkout(
    client: FoodApiClient,
    cart: Cart,
    delivery: DeliveryDetails,
    identity: Optional[Identity] = None,
) -> CheckoutResult:
    """
    Create the payment session. The cart is cleared only once the server has
    returned a redirect URL; every failure leaves it untouched.
    """
    import auth

    errors = validation.validate_delivery(asdict(delivery))
    if errors:
        raise CartError("; ".join(errors))

    body = build_checkout_request(cart, delivery)
    payload = client.create_checkout_session(body)
    url = (payload.get("session") or {}).get("url")
    if not url:
        raise ApiError("No checkout session URL received")

    result = CheckoutResult(url=url, restaurant_id=cart.active_restaurant_id, grand_total=cart.grand_total())
    auth.get_audit_repo().log_action(
        AuditAction.CHECKOUT_START,
        target_type="order",
        actor_user_id=identity.id if identity else None,
        target_id=result.restaurant_id,
        metadata={"items": cart.items_count(), "amount": round(result.grand_total, 2)},
    )
    cart.clear()
    log.info(f"Checkout session created for restaurant {result.restaurant_id}")
    return result
