import streamlit as st
from infrastructure.api.food_api_client import ApiError
from services import order_service
from use_cases import checkout_flow
from use_cases.cart import CartError
from utils import session_manager

def _render_line(cart, item):
    col_name, col_price, col_qty, col_total, col_remove = st.columns([3, 1, 2, 1, 1])
    col_name.write(item.name)
    col_price.write(f"₹{item.unit_price:.0f}")
    with col_qty:
        minus, qty, plus = st.columns(3)
        if minus.button("−", key=f"dec_{item.item_id}", disabled=item.quantity <= 1):
            cart.decrement_quantity(item.item_id)
            st.rerun()
        qty.write(str(item.quantity))
        if plus.button("+", key=f"inc_{item.item_id}"):
            cart.increment_quantity(item.item_id)
            st.rerun()
    col_total.write(f"₹{item.line_total:.0f}")
    if col_remove.button("Remove", key=f"rm_{item.item_id}"):
        cart.remove_item(item.item_id)
        st.rerun()

def _render_checkout(cart):
    identity = session_manager.current_snapshot().identity
    defaults = checkout_flow.DeliveryDetails.from_identity(identity)
    with st.form("checkout_form"):
        st.subheader("Delivery details")
        name = st.text_input("Full name", value=defaults.name)
        email = st.text_input("Email", value=defaults.email, disabled=True)
        contact = st.text_input("Contact", value=defaults.contact)
        address = st.text_input("Address", value=defaults.address)
        city = st.text_input("City", value=defaults.city)
        country = st.text_input("Country", value=defaults.country)
        submitted = st.form_submit_button("Continue to payment", type="primary")

    if not submitted:
        return
    delivery = checkout_flow.DeliveryDetails(name, email, contact, address, city, country)
    try:
        result = checkout_flow.start_checkout(session_manager.get_client(), cart, delivery, identity)
    except (ApiError, CartError) as e:
        st.error(f"Failed to create checkout session: {e}")
        return
    st.success("Order placed! Your cart has been cleared.")
    st.link_button("Pay now", result.url, type="primary")

def render_cart():
    st.title("🛒 Your cart")
    cart = session_manager.get_cart()
    if cart.is_empty():
        st.info("Your cart is empty.")
        if st.button("Browse restaurants"):
            session_manager.navigate("/search")
        return

    if cart.active_restaurant_name:
        st.caption(f"Ordering from {cart.active_restaurant_name}")
    for item in cart.items:
        _render_line(cart, item)

    st.divider()
    st.write(f"Subtotal: ₹{cart.subtotal():.2f}")
    st.write(f"Delivery fee: ₹{cart.delivery_fee():.2f}")
    st.write(f"Tax (5%): ₹{cart.tax():.2f}")
    st.markdown(f"**Total: ₹{cart.grand_total():.2f}**")

    col_clear, _ = st.columns([1, 3])
    if col_clear.button("Clear cart"):
        cart.clear()
        st.rerun()

    _render_checkout(cart)

def render_order_status():
    st.title("✅ Order status")
    try:
        orders = session_manager.get_client().get_orders()
    except ApiError as e:
        st.error(e.message or "Failed to fetch your orders")
        return
    if not orders:
        st.info("No orders yet.")
        return
    df = order_service.orders_to_frame(orders)
    latest = df.iloc[0]
    st.success(f"Latest order {latest['Order']}: {latest['Status']}")
    st.dataframe(df, use_container_width=True, hide_index=True)
