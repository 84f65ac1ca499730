"""Session DTOs shared across application layers."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

# Profile fields a user may change; verified/admin flags are server-owned.
EDITABLE_PROFILE_FIELDS = ("fullname", "email", "contact", "address", "city", "country", "profile_picture")

_PAYLOAD_KEYS = {
    "fullname": "fullname",
    "email": "email",
    "contact": "contact",
    "address": "address",
    "city": "city",
    "country": "country",
    "profile_picture": "profilePicture",
}


@dataclass(frozen=True)
class Identity:
    id: str
    fullname: str
    email: str
    contact: str = ""
    address: str = ""
    city: str = ""
    country: str = ""
    profile_picture: str = ""
    verified: bool = False
    is_admin: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Identity":
        return cls(
            id=str(payload.get("_id") or payload.get("id") or ""),
            fullname=payload.get("fullname") or "",
            email=payload.get("email") or "",
            contact=str(payload.get("contact") or ""),
            address=payload.get("address") or "",
            city=payload.get("city") or "",
            country=payload.get("country") or "",
            profile_picture=payload.get("profilePicture") or "",
            verified=bool(payload.get("isVerified", False)),
            is_admin=bool(payload.get("admin", False)),
        )

    def merged(self, patch: Mapping[str, Any]) -> "Identity":
        changes = {k: v for k, v in patch.items() if k in EDITABLE_PROFILE_FIELDS and v is not None}
        return replace(self, **changes)


def profile_patch_to_payload(patch: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate an Identity-style patch into the API's field names."""
    return {_PAYLOAD_KEYS[k]: v for k, v in patch.items() if k in _PAYLOAD_KEYS and v is not None}


@dataclass(frozen=True)
class SessionSnapshot:
    checking: bool = True
    authenticated: bool = False
    identity: Optional[Identity] = None

    def __post_init__(self):
        if self.checking and (self.authenticated or self.identity is not None):
            raise ValueError("A session still checking cannot carry an identity")
        if self.authenticated != (self.identity is not None):
            raise ValueError("A session carries an identity exactly when it is authenticated")


CHECKING = SessionSnapshot(checking=True)
SIGNED_OUT = SessionSnapshot(checking=False)


def is_admin(identity: Optional[Identity]) -> bool:
    return identity is not None and identity.is_admin


def is_verified(identity: Optional[Identity]) -> bool:
    return identity is not None and identity.verified
