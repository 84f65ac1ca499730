"""
Shopping cart bound to a single restaurant.

The cart never mixes items from two restaurants: adding an item from another
restaurant replaces the whole cart. Every mutation is written through the
optional CartStore so the cart survives restarts.
"""

import logging
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional, Protocol, Tuple

from use_cases.menu_cache import MenuItem

log = logging.getLogger(__name__)

DELIVERY_FEE = 40.0
TAX_RATE = 0.05

CartSnapshot = Dict[str, Any]


class CartError(ValueError):
    pass


class CartStore(Protocol):
    def save(self, snapshot: CartSnapshot) -> None: ...

    def load(self) -> Optional[CartSnapshot]: ...


@dataclass(frozen=True)
class CartItem:
    item_id: str
    name: str
    unit_price: float
    image: str = ""
    quantity: int = 1

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    @classmethod
    def from_menu(cls, menu: MenuItem) -> "CartItem":
        return cls(item_id=menu.menu_id, name=menu.name, unit_price=menu.price, image=menu.image)


class Cart:
    def __init__(self, store: Optional[CartStore] = None):
        self.store = store
        self._items: List[CartItem] = []
        self.active_restaurant_id: Optional[str] = None
        self.active_restaurant_name: Optional[str] = None

    # --- persistence ---

    def to_snapshot(self) -> CartSnapshot:
        return {
            "items": [asdict(item) for item in self._items],
            "restaurant_id": self.active_restaurant_id,
            "restaurant_name": self.active_restaurant_name,
        }

    @classmethod
    def restore(cls, store: CartStore) -> "Cart":
        cart = cls(store=store)
        snapshot = store.load()
        if not snapshot:
            return cart
        items = [CartItem(**raw) for raw in snapshot.get("items") or []]
        restaurant_id = snapshot.get("restaurant_id")
        if items and not restaurant_id:
            # A snapshot breaking the single-restaurant rule is discarded, not repaired.
            log.warning("Discarding persisted cart with items but no restaurant")
            return cart
        cart._items = items
        cart.active_restaurant_id = restaurant_id
        cart.active_restaurant_name = snapshot.get("restaurant_name")
        return cart

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save(self.to_snapshot())

    # --- queries ---

    @property
    def items(self) -> Tuple[CartItem, ...]:
        return tuple(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def _index(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.item_id == item_id:
                return i
        return None

    def contains(self, item_id: str) -> bool:
        return self._index(item_id) is not None

    def item_quantity(self, item_id: str) -> int:
        idx = self._index(item_id)
        return self._items[idx].quantity if idx is not None else 0

    def items_count(self) -> int:
        return sum(item.quantity for item in self._items)

    def subtotal(self) -> float:
        return sum(item.line_total for item in self._items)

    def delivery_fee(self) -> float:
        return DELIVERY_FEE if self.subtotal() > 0 else 0.0

    def tax(self) -> float:
        return self.subtotal() * TAX_RATE

    def grand_total(self) -> float:
        return self.subtotal() + self.delivery_fee() + self.tax()

    # --- mutations ---

    def add_item(self, menu: MenuItem, restaurant_id: Optional[str] = None, restaurant_name: Optional[str] = None) -> None:
        switching = restaurant_id is not None and restaurant_id != self.active_restaurant_id
        if self.is_empty() or switching:
            target = restaurant_id or self.active_restaurant_id
            if target is None:
                raise CartError("Cannot start a cart without a restaurant")
            if switching and not self.is_empty():
                log.info(f"Cart switched from restaurant {self.active_restaurant_id} to {target}; previous items dropped")
            if target != self.active_restaurant_id:
                self.active_restaurant_name = None
            self._items = [CartItem.from_menu(menu)]
            self.active_restaurant_id = target
            if restaurant_name:
                self.active_restaurant_name = restaurant_name
            self._persist()
            return

        idx = self._index(menu.menu_id)
        if idx is not None:
            self._items[idx] = replace(self._items[idx], quantity=self._items[idx].quantity + 1)
        else:
            self._items.append(CartItem.from_menu(menu))
        if restaurant_name:
            self.active_restaurant_name = restaurant_name
        self._persist()

    def increment_quantity(self, item_id: str) -> None:
        idx = self._index(item_id)
        if idx is None:
            return
        self._items[idx] = replace(self._items[idx], quantity=self._items[idx].quantity + 1)
        self._persist()

    def decrement_quantity(self, item_id: str) -> None:
        """Quantity never drops below 1; use remove_item to take an item out."""
        idx = self._index(item_id)
        if idx is None or self._items[idx].quantity <= 1:
            return
        self._items[idx] = replace(self._items[idx], quantity=self._items[idx].quantity - 1)
        self._persist()

    def remove_item(self, item_id: str) -> None:
        idx = self._index(item_id)
        if idx is None:
            return
        del self._items[idx]
        self._persist()

    def clear(self) -> None:
        self._items = []
        self.active_restaurant_id = None
        self.active_restaurant_name = None
        self._persist()
