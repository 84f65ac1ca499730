"""Menu management: remote create/update/delete, then the matching cache mutation."""

import logging
from typing import Any, Dict, Optional

from infrastructure.api.food_api_client import ApiError, FoodApiClient, ImageUpload
from infrastructure.repositories.sqlite_audit_repository import AuditAction
from use_cases.menu_cache import MenuCache, MenuItem
from use_cases.session_models import Identity

log = logging.getLogger(__name__)


def _audit(action, identity: Optional[Identity], menu_id: Optional[str], metadata: Optional[Dict[str, Any]] = None):
    import auth

    auth.get_audit_repo().log_action(
        action,
        target_type="menu",
        actor_user_id=identity.id if identity else None,
        actor_role="admin" if identity and identity.is_admin else "user",
        target_id=menu_id,
        metadata=metadata,
    )


def _menu_from(payload: Dict[str, Any], operation: str) -> MenuItem:
    menu = payload.get("menu")
    if not menu:
        raise ApiError(f"{operation} response carried no menu")
    return MenuItem.from_payload(menu)


def create_menu(
    client: FoodApiClient,
    cache: MenuCache,
    fields: Dict[str, Any],
    image: ImageUpload,
    identity: Optional[Identity] = None,
) -> MenuItem:
    payload = client.create_menu(fields, image)
    menu = _menu_from(payload, "create menu")
    cache.insert_menu(menu)
    log.info(f"Menu {menu.menu_id} created")
    _audit(AuditAction.MENU_CREATE, identity, menu.menu_id)
    return menu


def edit_menu(
    client: FoodApiClient,
    cache: MenuCache,
    menu_id: str,
    fields: Dict[str, Any],
    image: Optional[ImageUpload] = None,
    identity: Optional[Identity] = None,
) -> MenuItem:
    payload = client.edit_menu(menu_id, fields, image)
    menu = _menu_from(payload, "edit menu")
    cache.replace_menu(menu)
    log.info(f"Menu {menu.menu_id} updated")
    _audit(AuditAction.MENU_UPDATE, identity, menu.menu_id)
    return menu


def remove_menu(
    client: FoodApiClient,
    cache: MenuCache,
    menu_id: str,
    identity: Optional[Identity] = None,
) -> None:
    client.remove_menu(menu_id)
    cache.delete_menu(menu_id)
    log.info(f"Menu {menu_id} deleted")
    _audit(AuditAction.MENU_DELETE, identity, menu_id)
