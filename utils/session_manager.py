import logging
import streamlit as st
import streamlit.components.v1 as components
import auth
from infrastructure.api.food_api_client import ApiError
from use_cases.cart import Cart
from use_cases.menu_cache import MenuCache
from use_cases.session_authority import SessionAuthority
from use_cases.session_models import SessionSnapshot

log = logging.getLogger(__name__)

"""
SESSION STATE CONTRACT

This module owns the per-browser-session state kept in st.session_state.
Every browser session gets its own API client, session authority and cart;
nothing here is shared between sessions.

api_client: FoodApiClient
    HTTP client whose cookie jar holds the API session cookie
    owner: session_manager

authority: SessionAuthority
    who the current user is (checking / authenticated / identity)
    owner: session_manager

cart: Cart
    single-restaurant cart, written through to the cart DB
    owner: cart views, checkout_flow

cart_owner: str
    key the cart is persisted under ("guest" or the user id)
    default: "guest"
    owner: session_manager

menu_cache: MenuCache
    owner's restaurant menu, mutated by menu_flow only
    owner: admin views

my_restaurant: Restaurant | None
    restaurant owned by the signed-in admin
    default: None
    owner: admin views

applied_filters: list[str]
    cuisine filters on the search page
    default: []
    owner: restaurant views

restaurant_orders: list[dict]
    incoming orders for the admin orders page
    default: []
    owner: admin views
"""

AUTH_COOKIE = "food_auth_token"
COOKIE_MAX_AGE = 7 * 24 * 60 * 60  # matches the API cookie lifetime

def init_session_state():
    if "api_client" not in st.session_state:
        st.session_state.api_client = auth.create_api_client()
    if "authority" not in st.session_state:
        st.session_state.authority = SessionAuthority(st.session_state.api_client)
    if "cart_owner" not in st.session_state:
        st.session_state.cart_owner = auth.GUEST_OWNER
    if "cart" not in st.session_state:
        st.session_state.cart = Cart.restore(auth.get_cart_repo(st.session_state.cart_owner))
    if "menu_cache" not in st.session_state:
        st.session_state.menu_cache = MenuCache()
    if "my_restaurant" not in st.session_state:
        st.session_state.my_restaurant = None
    if "applied_filters" not in st.session_state:
        st.session_state.applied_filters = []
    if "restaurant_orders" not in st.session_state:
        st.session_state.restaurant_orders = []

def get_client():
    return st.session_state.api_client

def get_authority() -> SessionAuthority:
    return st.session_state.authority

def current_snapshot() -> SessionSnapshot:
    return st.session_state.authority.snapshot()

def get_cart() -> Cart:
    return st.session_state.cart

def get_menu_cache() -> MenuCache:
    return st.session_state.menu_cache

def restore_api_cookie():
    """Seed the API client with the token the browser kept from an earlier visit."""
    try:
        token = st.context.cookies.get(AUTH_COOKIE)
    except Exception:
        # During some tests contexts might not be fully available
        token = None
    if token:
        from urllib.parse import unquote
        st.session_state.api_client.set_session_token(unquote(token))

def persist_api_cookie():
    token = st.session_state.api_client.session_token
    if not token:
        return
    components.html(
        f"""
        <script>
            var cookieStr = "{AUTH_COOKIE}=" + encodeURIComponent("{token}") + "; path=/; max-age={COOKIE_MAX_AGE}; SameSite=Lax";
            document.cookie = cookieStr;
            try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
        </script>
        """,
        height=0,
    )

def clear_browser_auth_token():
    components.html(
        f"""
        <script>
          document.cookie = "{AUTH_COOKIE}=; path=/; max-age=0; SameSite=Lax";
          try {{ window.parent.document.cookie = "{AUTH_COOKIE}=; path=/; max-age=0; SameSite=Lax"; }} catch (e) {{}}
        </script>
        """,
        height=0,
    )

def bind_cart_to_identity():
    """
    Point the cart at the persisted cart of the signed-in user.
    A non-empty guest cart is carried over instead of being replaced.
    """
    identity = current_snapshot().identity
    owner = auth.cart_owner_key(identity)
    if owner == st.session_state.cart_owner:
        return
    repo = auth.get_cart_repo(owner)
    cart = st.session_state.cart
    if not cart.is_empty():
        auth.get_cart_repo(st.session_state.cart_owner).delete()
        cart.store = repo
        repo.save(cart.to_snapshot())
    else:
        st.session_state.cart = Cart.restore(repo)
    st.session_state.cart_owner = owner

def reset_owner_state():
    st.session_state.menu_cache.clear()
    st.session_state.my_restaurant = None
    st.session_state.restaurant_orders = []

def navigate(path, **params):
    st.query_params.clear()
    st.query_params["page"] = path
    for key, value in params.items():
        st.query_params[key] = value
    st.rerun()

def current_path():
    return st.query_params.get("page", "/")

def logout():
    """Sign out locally even when the API cannot be reached, then drop all per-user state."""
    identity = current_snapshot().identity
    remote_error = None
    try:
        st.session_state.authority.logout()
    except ApiError as e:
        remote_error = e

    from infrastructure.repositories.sqlite_audit_repository import AuditAction
    auth.get_audit_repo().log_action(
        AuditAction.LOGOUT,
        target_type="session",
        actor_user_id=identity.id if identity else None,
        result="success" if remote_error is None else "local_only",
    )

    st.session_state.cart.clear()
    st.session_state.cart = Cart.restore(auth.get_cart_repo(auth.GUEST_OWNER))
    st.session_state.cart_owner = auth.GUEST_OWNER
    reset_owner_state()
    clear_browser_auth_token()
    if remote_error is not None:
        st.warning("Logged out locally - server connection failed")
    return remote_error
