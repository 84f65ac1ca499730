"""Client-side copy of the owner's restaurant menu, updated only from server-confirmed mutations."""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

log = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Main Course"


@dataclass(frozen=True)
class MenuItem:
    menu_id: str
    name: str
    description: str
    price: float
    image: str = ""
    category: str = DEFAULT_CATEGORY
    is_available: bool = True
    is_vegetarian: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "MenuItem":
        is_available = payload.get("isAvailable")
        return cls(
            menu_id=str(payload.get("_id") or payload.get("id") or ""),
            name=payload.get("name") or "",
            description=payload.get("description") or "",
            price=float(payload.get("price") or 0),
            image=payload.get("image") or "",
            category=payload.get("category") or DEFAULT_CATEGORY,
            is_available=True if is_available is None else bool(is_available),
            is_vegetarian=bool(payload.get("isVegetarian", False)),
        )


class MenuCache:
    def __init__(self, menus: Iterable[MenuItem] = ()):
        self._menus: List[MenuItem] = []
        self.load(menus)

    @property
    def menus(self) -> Tuple[MenuItem, ...]:
        return tuple(self._menus)

    def __len__(self) -> int:
        return len(self._menus)

    def _index(self, menu_id: str) -> Optional[int]:
        for i, menu in enumerate(self._menus):
            if menu.menu_id == menu_id:
                return i
        return None

    def get(self, menu_id: str) -> Optional[MenuItem]:
        idx = self._index(menu_id)
        return self._menus[idx] if idx is not None else None

    def load(self, menus: Iterable[MenuItem]) -> None:
        """Replace the cache with a fresh server listing (later duplicates win)."""
        self._menus = []
        for menu in menus:
            self.insert_menu(menu)

    def insert_menu(self, menu: MenuItem) -> None:
        idx = self._index(menu.menu_id)
        if idx is not None:
            self._menus[idx] = menu
            return
        self._menus.append(menu)

    def replace_menu(self, menu: MenuItem) -> None:
        idx = self._index(menu.menu_id)
        if idx is None:
            log.debug(f"replace_menu: {menu.menu_id} not cached, ignoring")
            return
        if self._menus[idx] != menu:
            self._menus[idx] = menu

    def delete_menu(self, menu_id: str) -> None:
        idx = self._index(menu_id)
        if idx is None:
            log.debug(f"delete_menu: {menu_id} not cached, ignoring")
            return
        del self._menus[idx]

    def clear(self) -> None:
        self._menus = []
