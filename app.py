import streamlit as st
import os

from infrastructure.observability import setup_observability
setup_observability()

import ui
from utils import session_manager
from use_cases import auth_flow, bootstrap
from views import admin_view, cart_view, login_view, profile_view, restaurant_view
from datetime import datetime, timezone

# --- PAGE SETUP ---
st.set_page_config(page_title="Food Order", page_icon="🍽️", layout="wide", initial_sidebar_state="expanded")

FORCE_HTTPS = os.getenv("FORCE_HTTPS", "False").lower() == "true"

# Health Check (Basic load-balancer heartbeat)
if st.query_params.get("health") == "1":
    st.write({"status": "ok", "version": "1.0", "uptime": datetime.now(timezone.utc).isoformat()})
    st.stop()

if FORCE_HTTPS:
    proto = st.context.headers.get("x-forwarded-proto", "http").lower()
    if proto != "https":
        st.error("🚨 Insecure connection. Please use HTTPS.")
        st.stop()

ui.setup_style()

PAGES = {
    "/": restaurant_view.render_home,
    "/search": restaurant_view.render_search,
    "/restaurant": restaurant_view.render_restaurant_detail,
    "/login": login_view.render_login,
    "/signup": login_view.render_signup,
    "/verify-email": login_view.render_verify_email,
    "/forgot-password": login_view.render_forgot_password,
    "/reset-password": login_view.render_reset_password,
    "/profile": profile_view.render_profile,
    "/cart": cart_view.render_cart,
    "/order/status": cart_view.render_order_status,
    "/admin/restaurant": admin_view.render_admin_restaurant,
    "/admin/menu": admin_view.render_admin_menu,
    "/admin/orders": admin_view.render_admin_orders,
}

# --- STARTUP ORCHESTRATION ---
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.error("Storage is unavailable. Please try again later.")
    st.stop()

# --- ROUTE GATE ---
path = session_manager.current_path()
if path not in PAGES:
    path = "/"

access = auth_flow.ensure_access(path)
if access.status == "WAIT":
    ui.show_loading_overlay()
    st.stop()
if access.status == "REDIRECT":
    session_manager.navigate(access.redirect_to)

snapshot = session_manager.current_snapshot()

# Build Sentry Context
try:
    from infrastructure.observability import bind_user
    bind_user(snapshot.identity)
except (ImportError, AttributeError):
    pass

# --- SIDEBAR ---
with st.sidebar:
    st.markdown("## 🍽️ Food Order")
    if st.button("🏠 Home", use_container_width=True):
        session_manager.navigate("/")
    if st.button("🔎 Restaurants", use_container_width=True):
        session_manager.navigate("/search")

    cart = session_manager.get_cart()
    if st.button(f"🛒 Cart ({cart.items_count()})", use_container_width=True):
        session_manager.navigate("/cart")

    st.divider()

    if snapshot.authenticated:
        identity = snapshot.identity
        st.caption(f"Signed in as {identity.fullname or identity.email}")
        if st.button("👤 Profile", use_container_width=True):
            session_manager.navigate("/profile")
        if st.button("📦 My orders", use_container_width=True):
            session_manager.navigate("/order/status")

        if identity.is_admin:
            with st.expander("⚙️ Dashboard", expanded=path.startswith("/admin")):
                if st.button("Restaurant", use_container_width=True):
                    session_manager.navigate("/admin/restaurant")
                if st.button("Menu", use_container_width=True):
                    session_manager.navigate("/admin/menu")
                if st.button("Orders", use_container_width=True):
                    session_manager.navigate("/admin/orders")

        if st.button("Log out", key="logout_btn", type="secondary"):
            session_manager.logout()
            session_manager.navigate("/login")
    else:
        if st.button("Log in", type="primary", use_container_width=True):
            session_manager.navigate("/login")
        if st.button("Sign up", use_container_width=True):
            session_manager.navigate("/signup")

    try:
        import sentry_sdk
        sentry_sdk.set_tag("app.page", path)
    except ImportError:
        pass

# --- PAGE BODY ---
PAGES[path]()
