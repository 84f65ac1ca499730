import pandas as pd
from services import order_service

ORDERS = [
    {
        "_id": "o1",
        "createdAt": "2024-05-01T10:00:00Z",
        "status": "confirmed",
        "deliveryDetails": {"name": "Asha", "city": "Pune"},
        "cartItems": [{"name": "Biryani", "price": "200", "quantity": "2"}],
        "totalAmount": 460,
    },
    {
        "_id": "o2",
        "createdAt": "2024-05-03T10:00:00Z",
        "status": "outfordelivery",
        "deliveryDetails": {"name": "Ravi", "city": "Delhi"},
        "cartItems": [{"name": "Momos", "price": 120, "quantity": 1}, {"name": "Tea", "price": 20, "quantity": 3}],
    },
]


def test_orders_to_frame_newest_first():
    df = order_service.orders_to_frame(ORDERS)
    assert list(df.columns) == order_service.ORDER_COLUMNS
    assert list(df["Order"]) == ["o2", "o1"]
    assert df.loc[0, "Status"] == "Out for Delivery"
    assert df.loc[0, "Quantity"] == 4
    assert df.loc[0, "Items"] == "Momos x1, Tea x3"


def test_amount_prefers_server_total():
    df = order_service.orders_to_frame(ORDERS)
    amounts = dict(zip(df["Order"], df["Amount"]))
    assert amounts["o1"] == 460.0
    assert amounts["o2"] == 180.0


def test_empty_orders_give_empty_frame_with_columns():
    df = order_service.orders_to_frame([])
    assert df.empty
    assert list(df.columns) == order_service.ORDER_COLUMNS


def test_bad_dates_are_sorted_last():
    df = order_service.orders_to_frame(ORDERS + [{"_id": "o3", "createdAt": "not a date"}])
    assert df.iloc[-1]["Order"] == "o3"
    assert pd.isna(df.iloc[-1]["Date"])


def test_status_counts_fold_confirmed_into_preparing():
    counts = order_service.status_counts(ORDERS + [{"_id": "o3"}, {"_id": "o4", "status": "weird"}])
    assert counts == {"pending": 1, "preparing": 1, "outfordelivery": 1, "delivered": 0}


def test_replace_order_status_returns_copy():
    updated = order_service.replace_order_status(ORDERS, "o1", "delivered")
    assert updated[0]["status"] == "delivered"
    assert ORDERS[0]["status"] == "confirmed"
    assert updated[1] is ORDERS[1]


def test_status_labels():
    assert order_service.format_status("outfordelivery") == "Out for Delivery"
    assert order_service.format_status("unknown") == "unknown"
    assert order_service.is_known_status("pending")
    assert not order_service.is_known_status("lost")
