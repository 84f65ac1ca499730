from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

from use_cases.menu_cache import MenuItem

DEFAULT_RATING = 4.0
DEFAULT_COST = 500
DEFAULT_OPENING_HOURS = "10:00 AM - 10:00 PM"

CUISINE_FILTERS = ["Italian", "Burger", "Thali", "Biryani", "Momos", "Pizza", "Sushi", "Pasta", "Salad"]


@dataclass(frozen=True)
class Restaurant:
    restaurant_id: str
    name: str
    city: str
    country: str
    delivery_time: int
    cuisines: Tuple[str, ...] = ()
    image_url: str = ""
    rating: float = DEFAULT_RATING
    location: str = ""
    cost: int = DEFAULT_COST
    opening_hours: str = DEFAULT_OPENING_HOURS
    menus: Tuple[MenuItem, ...] = field(default_factory=tuple)


def normalize_restaurant(payload: Mapping[str, Any]) -> Restaurant:
    """Build a Restaurant, filling the display fields the API may omit."""
    city = payload.get("city") or ""
    country = payload.get("country") or ""
    menus = tuple(MenuItem.from_payload(m) for m in payload.get("menus") or [] if isinstance(m, Mapping))
    try:
        delivery_time = int(payload.get("deliveryTime") or 0)
    except (TypeError, ValueError):
        delivery_time = 0
    return Restaurant(
        restaurant_id=str(payload.get("_id") or ""),
        name=payload.get("restaurantName") or "",
        city=city,
        country=country,
        delivery_time=delivery_time,
        cuisines=tuple(payload.get("cuisines") or ()),
        image_url=payload.get("imageUrl") or "",
        rating=float(payload.get("rating") or DEFAULT_RATING),
        location=payload.get("location") or f"{city}, {country}".strip(", "),
        cost=int(payload.get("cost") or DEFAULT_COST),
        opening_hours=payload.get("openingHours") or DEFAULT_OPENING_HOURS,
        menus=menus,
    )


def parse_search_result(payload: Dict[str, Any]) -> Tuple[List[Restaurant], int, bool]:
    """(restaurants, total count, has more) from a search response."""
    data = payload.get("data") or []
    restaurants = [normalize_restaurant(r) for r in data]
    total = payload.get("totalCount")
    return restaurants, int(total) if total is not None else len(restaurants), bool(payload.get("hasMore", False))


def toggle_filter(applied: List[str], value: str) -> List[str]:
    if value in applied:
        return [f for f in applied if f != value]
    return applied + [value]
