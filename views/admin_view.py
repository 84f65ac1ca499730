import streamlit as st
from infrastructure.api.food_api_client import ApiError
from services import order_service, restaurant_service, validation
from use_cases import menu_flow, restaurant_flow
from utils import session_manager

def _upload(file):
    if file is None:
        return None
    return (file.name, file.getvalue(), file.type)

def _identity():
    return session_manager.current_snapshot().identity

def _ensure_restaurant_loaded():
    if st.session_state.my_restaurant is None:
        try:
            st.session_state.my_restaurant = restaurant_flow.load_owner_restaurant(
                session_manager.get_client(), session_manager.get_menu_cache()
            )
        except ApiError as e:
            st.error(e.message or "Failed to load your restaurant")
    return st.session_state.my_restaurant

def render_admin_restaurant():
    st.title("🏪 My restaurant")
    restaurant = _ensure_restaurant_loaded()
    exists = restaurant is not None

    with st.form("restaurant_form"):
        name = st.text_input("Restaurant name", value=restaurant.name if exists else "")
        city = st.text_input("City", value=restaurant.city if exists else "")
        country = st.text_input("Country", value=restaurant.country if exists else "")
        delivery_time = st.number_input(
            "Delivery time (minutes)", min_value=0, step=5, value=restaurant.delivery_time if exists else 30
        )
        cuisines = st.multiselect(
            "Cuisines",
            options=sorted(set(restaurant_service.CUISINE_FILTERS) | set(restaurant.cuisines if exists else ())),
            default=list(restaurant.cuisines) if exists else [],
        )
        image = st.file_uploader("Restaurant banner", type=["png", "jpg", "jpeg", "webp"])
        submitted = st.form_submit_button("Update restaurant" if exists else "Add restaurant", type="primary")

    if not submitted:
        return
    fields = {
        "restaurantName": name, "city": city, "country": country,
        "deliveryTime": int(delivery_time), "cuisines": cuisines, "image": _upload(image),
    }
    errors = validation.validate_restaurant(fields, image_required=not exists)
    if errors:
        for message in errors:
            st.error(message)
        return
    try:
        st.session_state.my_restaurant = restaurant_flow.save_restaurant(
            session_manager.get_client(), session_manager.get_menu_cache(),
            fields, fields["image"], exists, _identity()
        )
    except ApiError as e:
        st.error(e.message or "Failed to save restaurant")
        return
    st.success("Restaurant saved")

def _render_add_menu():
    with st.expander("➕ Add menu", expanded=False):
        with st.form("add_menu_form", clear_on_submit=True):
            name = st.text_input("Name")
            description = st.text_area("Description")
            price = st.number_input("Price (₹)", min_value=0.0, step=10.0)
            image = st.file_uploader("Menu image", type=["png", "jpg", "jpeg", "webp"])
            submitted = st.form_submit_button("Add", type="primary")
        if not submitted:
            return
        fields = {"name": name, "description": description, "price": price, "image": _upload(image)}
        errors = validation.validate_menu(fields)
        if errors:
            for message in errors:
                st.error(message)
            return
        try:
            menu_flow.create_menu(
                session_manager.get_client(), session_manager.get_menu_cache(), fields, fields["image"], _identity()
            )
        except ApiError as e:
            st.error(e.message or "Failed to create menu")
            return
        st.success("Menu added successfully")

def _render_menu_row(menu):
    with st.container(border=True):
        col_img, col_info, col_actions = st.columns([1, 3, 1])
        if menu.image:
            col_img.image(menu.image, use_container_width=True)
        col_info.markdown(f"**{menu.name}** · ₹{menu.price:.0f}")
        col_info.caption(menu.description)
        if col_actions.button("Delete", key=f"del_menu_{menu.menu_id}"):
            try:
                menu_flow.remove_menu(
                    session_manager.get_client(), session_manager.get_menu_cache(), menu.menu_id, _identity()
                )
            except ApiError as e:
                st.error(e.message or "Failed to delete menu")
            else:
                st.rerun()

        with st.expander("Edit"):
            with st.form(f"edit_menu_{menu.menu_id}"):
                name = st.text_input("Name", value=menu.name)
                description = st.text_area("Description", value=menu.description)
                price = st.number_input("Price (₹)", min_value=0.0, step=10.0, value=float(menu.price))
                image = st.file_uploader("Replace image", type=["png", "jpg", "jpeg", "webp"])
                submitted = st.form_submit_button("Save")
            if submitted:
                fields = {"name": name, "description": description, "price": price, "image": _upload(image)}
                errors = validation.validate_menu(fields, image_required=False)
                if errors:
                    for message in errors:
                        st.error(message)
                    return
                try:
                    menu_flow.edit_menu(
                        session_manager.get_client(), session_manager.get_menu_cache(),
                        menu.menu_id, fields, fields["image"], _identity()
                    )
                except ApiError as e:
                    st.error(e.message or "Failed to update menu")
                else:
                    st.rerun()

def render_admin_menu():
    st.title("📋 Menu")
    if _ensure_restaurant_loaded() is None:
        st.info("Create your restaurant before adding menus.")
        return
    _render_add_menu()
    cache = session_manager.get_menu_cache()
    if not len(cache):
        st.info("No menus yet.")
        return
    for menu in cache.menus:
        _render_menu_row(menu)

def render_admin_orders():
    st.title("📦 Orders")
    if st.button("Refresh") or not st.session_state.restaurant_orders:
        try:
            st.session_state.restaurant_orders = session_manager.get_client().get_restaurant_orders()
        except ApiError as e:
            st.error(e.message or "Failed to fetch orders")
            return

    orders = st.session_state.restaurant_orders
    counts = order_service.status_counts(orders)
    cols = st.columns(4)
    for col, (status, count) in zip(cols, counts.items()):
        col.metric(order_service.format_status(status), count)

    if not orders:
        st.info("No orders yet.")
        return

    df = order_service.orders_to_frame(orders)
    st.dataframe(df, use_container_width=True, hide_index=True)

    st.subheader("Update status")
    by_id = {str(o.get("_id")): o for o in orders}
    order_id = st.selectbox("Order", options=list(by_id.keys()))
    current = by_id[order_id].get("status") or "pending"
    new_status = st.selectbox(
        "Status",
        options=order_service.ORDER_STATUSES,
        index=order_service.ORDER_STATUSES.index(current) if order_service.is_known_status(current) else 0,
        format_func=order_service.format_status,
    )
    if st.button("Apply status", type="primary", disabled=new_status == current):
        try:
            st.session_state.restaurant_orders = restaurant_flow.change_order_status(
                session_manager.get_client(), orders, order_id, new_status, _identity()
            )
        except (ApiError, ValueError) as e:
            st.error(str(e) or "Failed to update order status")
        else:
            st.rerun()
