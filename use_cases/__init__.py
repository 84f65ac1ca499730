"""Application layer contracts for orchestrating high-level flows."""

from .access_policy import CapabilityRequirement, Decision, evaluate, redirect_if_authenticated
from .auth_flow import AuthFlowResult, AuthFlowStatus, ensure_access
from .bootstrap import StartupResult, StartupStatus, run_startup
from .cart import Cart, CartError, CartItem
from .menu_cache import MenuCache, MenuItem
from .session_authority import SessionAuthority, SessionNotReadyError
from .session_models import Identity, SessionSnapshot, is_admin, is_verified

__all__ = [
    "AuthFlowResult",
    "AuthFlowStatus",
    "CapabilityRequirement",
    "Cart",
    "CartError",
    "CartItem",
    "Decision",
    "Identity",
    "MenuCache",
    "MenuItem",
    "SessionAuthority",
    "SessionNotReadyError",
    "SessionSnapshot",
    "StartupResult",
    "StartupStatus",
    "ensure_access",
    "evaluate",
    "is_admin",
    "is_verified",
    "redirect_if_authenticated",
    "run_startup",
]
