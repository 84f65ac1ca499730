"""Route access decisions evaluated against the current session snapshot."""

from dataclasses import dataclass
from typing import Dict, Literal, Optional

from use_cases.session_models import SessionSnapshot, is_admin, is_verified

DecisionStatus = Literal["CHECKING", "REDIRECT", "ALLOW"]
DenialReason = Literal["unauthenticated", "unverified", "unauthorized", "already_authenticated"]

LOGIN_PATH = "/login"
VERIFY_PATH = "/verify-email"
HOME_PATH = "/"


@dataclass(frozen=True)
class CapabilityRequirement:
    require_auth: bool = False
    require_verified: bool = False
    require_admin: bool = False
    redirect_to: Optional[str] = None


@dataclass(frozen=True)
class Decision:
    status: DecisionStatus
    redirect_to: Optional[str] = None
    reason: Optional[DenialReason] = None

    @property
    def allowed(self) -> bool:
        return self.status == "ALLOW"


_CHECKING = Decision(status="CHECKING")
_ALLOW = Decision(status="ALLOW")


def evaluate(session: SessionSnapshot, requirement: CapabilityRequirement) -> Decision:
    """
    Decide access for one protected resource. Rules run in a fixed order and
    the first one that matches wins: checking, auth, verification, admin.
    A missing identity counts as unverified and as not admin.
    """
    if session.checking:
        return _CHECKING

    if requirement.require_auth and not session.authenticated:
        return Decision("REDIRECT", requirement.redirect_to or LOGIN_PATH, "unauthenticated")

    if requirement.require_verified and not is_verified(session.identity):
        return Decision("REDIRECT", requirement.redirect_to or VERIFY_PATH, "unverified")

    if requirement.require_admin and not is_admin(session.identity):
        return Decision("REDIRECT", requirement.redirect_to or HOME_PATH, "unauthorized")

    return _ALLOW


def redirect_if_authenticated(session: SessionSnapshot, redirect_to: str = HOME_PATH) -> Decision:
    """Guard for login/signup pages: signed-in users are sent away from them."""
    if session.checking:
        return _CHECKING
    if session.authenticated:
        return Decision("REDIRECT", redirect_to, "already_authenticated")
    return _ALLOW


PUBLIC = CapabilityRequirement()
SIGNED_IN = CapabilityRequirement(require_auth=True, require_verified=True)
ADMIN = CapabilityRequirement(require_auth=True, require_admin=True)

ROUTE_REQUIREMENTS: Dict[str, CapabilityRequirement] = {
    "/": PUBLIC,
    "/search": PUBLIC,
    "/restaurant": PUBLIC,
    "/profile": SIGNED_IN,
    "/cart": SIGNED_IN,
    "/order/status": SIGNED_IN,
    "/admin/restaurant": ADMIN,
    "/admin/menu": ADMIN,
    "/admin/orders": ADMIN,
    "/forgot-password": PUBLIC,
    "/reset-password": PUBLIC,
    "/verify-email": PUBLIC,
}

# Pages that bounce users who are already signed in.
GUEST_ONLY_ROUTES = frozenset({"/login", "/signup"})


def requirement_for(path: str) -> CapabilityRequirement:
    return ROUTE_REQUIREMENTS.get(path, PUBLIC)


def decide_route(session: SessionSnapshot, path: str) -> Decision:
    if path in GUEST_ONLY_ROUTES:
        return redirect_if_authenticated(session)
    return evaluate(session, requirement_for(path))
