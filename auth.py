from infrastructure.api.food_api_client import FoodApiClient
from infrastructure.repositories.sqlite_audit_repository import SQLiteAuditRepository
from infrastructure.repositories.sqlite_cart_repository import SQLiteCartRepository
import logging
import os
import streamlit as st

log = logging.getLogger(__name__)

AUDIT_DB = "audit.db"
CART_DB = "cart.db"
DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_API_TIMEOUT = 10.0
GUEST_OWNER = "guest"

def get_secret(key):
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None

def get_setting(key, default=None):
    return get_secret(key) or os.getenv(key) or default

def get_api_url():
    return get_setting("FOOD_API_URL", DEFAULT_API_URL)

def get_api_timeout():
    raw = get_setting("API_TIMEOUT")
    try:
        return float(raw) if raw else DEFAULT_API_TIMEOUT
    except ValueError:
        log.warning(f"Invalid API_TIMEOUT {raw!r}, using {DEFAULT_API_TIMEOUT}s")
        return DEFAULT_API_TIMEOUT

def create_api_client() -> FoodApiClient:
    # One client per browser session: the cookie jar is the login.
    return FoodApiClient(get_api_url(), timeout=get_api_timeout())

_audit_repo = None

def get_audit_repo() -> SQLiteAuditRepository:
    global _audit_repo
    db_path = get_setting("AUDIT_DB", AUDIT_DB)
    if _audit_repo is None or _audit_repo.db_path != db_path:
        _audit_repo = SQLiteAuditRepository(db_path)
    return _audit_repo

def get_cart_repo(owner_key=GUEST_OWNER) -> SQLiteCartRepository:
    return SQLiteCartRepository(get_setting("CART_DB", CART_DB), owner_key or GUEST_OWNER)

def cart_owner_key(identity) -> str:
    return identity.id if identity is not None and identity.id else GUEST_OWNER

def init_storage():
    get_audit_repo().init_db()
    get_cart_repo().init_db()
