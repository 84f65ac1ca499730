import streamlit as st
from infrastructure.api.food_api_client import ApiError
from services import restaurant_service
from use_cases.cart import CartError
from utils import session_manager

def render_home():
    st.title("🍛 Order food from the best restaurants near you")
    with st.form("hero_search"):
        search_text = st.text_input("Search restaurant by name, city or country")
        submitted = st.form_submit_button("Search", type="primary")
    if submitted:
        session_manager.navigate("/search", q=search_text.strip())

def _render_filters():
    with st.sidebar:
        st.subheader("Filter by cuisines")
        applied = st.session_state.applied_filters
        for cuisine in restaurant_service.CUISINE_FILTERS:
            checked = st.checkbox(cuisine, value=cuisine in applied, key=f"cuisine_{cuisine}")
            if checked != (cuisine in applied):
                st.session_state.applied_filters = restaurant_service.toggle_filter(applied, cuisine)
                st.rerun()
        if applied and st.button("Reset filters"):
            st.session_state.applied_filters = []
            st.rerun()

def render_search():
    _render_filters()
    search_text = st.query_params.get("q", "")
    search_query = st.text_input("Refine by cuisine or dish", key="search_query")
    try:
        payload = session_manager.get_client().search_restaurants(
            search_text, search_query, st.session_state.applied_filters
        )
    except ApiError as e:
        st.error(e.message or "Restaurant search failed")
        return
    restaurants, total, has_more = restaurant_service.parse_search_result(payload)

    label = f"'{search_text}'" if search_text else "all restaurants"
    st.subheader(f"{total} result(s) for {label}")
    if not restaurants:
        st.info("No restaurants found. Try another search or clear the filters.")
        return

    for restaurant in restaurants:
        with st.container(border=True):
            col_img, col_info = st.columns([1, 3])
            if restaurant.image_url:
                col_img.image(restaurant.image_url, use_container_width=True)
            col_info.markdown(f"### {restaurant.name}")
            col_info.caption(f"📍 {restaurant.location} · ⭐ {restaurant.rating:.1f} · 🕒 {restaurant.delivery_time} min")
            col_info.write(", ".join(restaurant.cuisines))
            if col_info.button("View menu", key=f"view_{restaurant.restaurant_id}"):
                session_manager.navigate("/restaurant", id=restaurant.restaurant_id)
    if has_more:
        st.caption("More restaurants available, refine your search to narrow the list.")

def render_restaurant_detail():
    restaurant_id = st.query_params.get("id", "")
    if not restaurant_id:
        st.error("No restaurant selected.")
        return
    try:
        restaurant = restaurant_service.normalize_restaurant(
            session_manager.get_client().get_restaurant(restaurant_id)
        )
    except ApiError as e:
        st.error(e.message or "Restaurant not found")
        return

    if restaurant.image_url:
        st.image(restaurant.image_url, use_container_width=True)
    st.title(restaurant.name)
    st.caption(
        f"📍 {restaurant.location} · 🕒 {restaurant.delivery_time} min · "
        f"🕙 {restaurant.opening_hours} · ⭐ {restaurant.rating:.1f}"
    )

    cart = session_manager.get_cart()
    if not cart.is_empty() and cart.active_restaurant_id != restaurant.restaurant_id:
        st.warning(
            f"Your cart holds items from {cart.active_restaurant_name or 'another restaurant'}. "
            "Adding an item here will replace them."
        )

    st.subheader("Available menus")
    if not restaurant.menus:
        st.info("This restaurant has no menu yet.")
        return
    cols = st.columns(3)
    for i, menu in enumerate(restaurant.menus):
        with cols[i % 3].container(border=True):
            if menu.image:
                st.image(menu.image, use_container_width=True)
            st.markdown(f"**{menu.name}**")
            st.caption(menu.description)
            st.write(f"₹{menu.price:.0f}")
            in_cart = cart.item_quantity(menu.menu_id) if cart.active_restaurant_id == restaurant.restaurant_id else 0
            label = f"Add to cart ({in_cart})" if in_cart else "Add to cart"
            if st.button(label, key=f"add_{menu.menu_id}", disabled=not menu.is_available):
                try:
                    cart.add_item(menu, restaurant.restaurant_id, restaurant.name)
                except CartError as e:
                    st.error(str(e))
                else:
                    st.toast(f"Added {menu.name} to cart")
                    st.rerun()
