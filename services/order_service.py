import pandas as pd
from typing import Any, Dict, List, Mapping

ORDER_STATUSES = ["pending", "confirmed", "preparing", "outfordelivery", "delivered"]

STATUS_LABELS = {
    "pending": "Pending",
    "confirmed": "Confirmed",
    "preparing": "Preparing",
    "outfordelivery": "Out for Delivery",
    "delivered": "Delivered",
}

ORDER_COLUMNS = ["Order", "Date", "Customer", "City", "Items", "Quantity", "Amount", "Status"]


def format_status(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def is_known_status(status: str) -> bool:
    return status in ORDER_STATUSES


def order_amount(order: Mapping[str, Any]) -> float:
    """Server total when present, otherwise recomputed from the cart lines."""
    if order.get("totalAmount") is not None:
        return float(order["totalAmount"])
    return float(sum(float(i.get("price") or 0) * int(i.get("quantity") or 0) for i in order.get("cartItems") or []))


def orders_to_frame(orders: List[Dict[str, Any]]) -> pd.DataFrame:
    """Flatten API orders into one row per order, newest first."""
    if not orders:
        return pd.DataFrame(columns=ORDER_COLUMNS)

    rows = []
    for order in orders:
        items = order.get("cartItems") or []
        delivery = order.get("deliveryDetails") or {}
        rows.append({
            "Order": str(order.get("_id") or ""),
            "Date": pd.to_datetime(order.get("createdAt"), errors="coerce", utc=True),
            "Customer": delivery.get("name") or "",
            "City": delivery.get("city") or "",
            "Items": ", ".join(f"{i.get('name')} x{i.get('quantity')}" for i in items),
            "Quantity": int(sum(int(i.get("quantity") or 0) for i in items)),
            "Amount": order_amount(order),
            "Status": format_status(order.get("status") or "pending"),
        })

    df = pd.DataFrame(rows, columns=ORDER_COLUMNS)
    return df.sort_values("Date", ascending=False, na_position="last").reset_index(drop=True)


def status_counts(orders: List[Dict[str, Any]]) -> Dict[str, int]:
    """Dashboard counters: confirmed orders are shown together with preparing ones."""
    counts = {"pending": 0, "preparing": 0, "outfordelivery": 0, "delivered": 0}
    for order in orders:
        status = order.get("status") or "pending"
        if status == "confirmed":
            status = "preparing"
        if status in counts:
            counts[status] += 1
    return counts


def replace_order_status(orders: List[Dict[str, Any]], order_id: str, status: str) -> List[Dict[str, Any]]:
    """Return a copy of the order list with one order's status replaced by the server-confirmed value."""
    return [{**o, "status": status} if str(o.get("_id")) == order_id else o for o in orders]
