"""Owner-side restaurant flows: load the owned restaurant, save it, and move orders through their statuses."""

import logging
from typing import Any, Dict, List, Optional

from infrastructure.api.food_api_client import ApiError, FoodApiClient, ImageUpload
from infrastructure.repositories.sqlite_audit_repository import AuditAction
from services import order_service, restaurant_service
from use_cases.menu_cache import MenuCache
from use_cases.session_models import Identity

log = logging.getLogger(__name__)


def load_owner_restaurant(client: FoodApiClient, cache: MenuCache) -> Optional[restaurant_service.Restaurant]:
    """Fetch the signed-in owner's restaurant and reload the menu cache from it."""
    payload = client.get_my_restaurant()
    if payload is None:
        cache.clear()
        return None
    restaurant = restaurant_service.normalize_restaurant(payload)
    cache.load(restaurant.menus)
    return restaurant


def save_restaurant(
    client: FoodApiClient,
    cache: MenuCache,
    fields: Dict[str, Any],
    image: Optional[ImageUpload],
    exists: bool,
    identity: Optional[Identity] = None,
) -> Optional[restaurant_service.Restaurant]:
    import auth

    if exists:
        client.update_restaurant(fields, image)
        action = AuditAction.RESTAURANT_UPDATE
    else:
        if image is None:
            raise ApiError("Image is required")
        client.create_restaurant(fields, image)
        action = AuditAction.RESTAURANT_CREATE
    auth.get_audit_repo().log_action(
        action, target_type="restaurant", actor_user_id=identity.id if identity else None
    )
    # Create does not echo the restaurant back; re-read so the cache matches the server.
    return load_owner_restaurant(client, cache)


def change_order_status(
    client: FoodApiClient,
    orders: List[Dict[str, Any]],
    order_id: str,
    status: str,
    identity: Optional[Identity] = None,
) -> List[Dict[str, Any]]:
    import auth

    if not order_service.is_known_status(status):
        raise ValueError(f"Unknown order status: {status}")
    payload = client.update_order_status(order_id, status)
    confirmed = payload.get("status") or status
    auth.get_audit_repo().log_action(
        AuditAction.ORDER_STATUS_CHANGE,
        target_type="order",
        actor_user_id=identity.id if identity else None,
        target_id=order_id,
        metadata={"new_status": confirmed},
    )
    log.info(f"Order {order_id} moved to {confirmed}")
    return order_service.replace_order_status(orders, order_id, confirmed)
