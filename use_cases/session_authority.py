"""
Session authority: the single source of truth for who the current user is.

One instance per browser session (see utils.session_manager). Remote calls are
made at most once per operation and failures propagate as ApiError, with two
exceptions: bootstrap() always resolves to a determined state, and logout()
resets local state before re-raising.
"""

import logging
from dataclasses import replace
from typing import Any, Dict, Mapping

from infrastructure.api.food_api_client import ApiError, FoodApiClient
from use_cases.session_models import (
    CHECKING,
    SIGNED_OUT,
    Identity,
    SessionSnapshot,
    profile_patch_to_payload,
)

log = logging.getLogger(__name__)


class SessionNotReadyError(RuntimeError):
    pass


def _identity_from(payload: Mapping[str, Any], operation: str) -> Identity:
    user = payload.get("user")
    if not user:
        raise ApiError(f"{operation} response carried no user")
    return Identity.from_payload(user)


class SessionAuthority:
    def __init__(self, client: FoodApiClient):
        self.client = client
        self._state = CHECKING

    def snapshot(self) -> SessionSnapshot:
        return self._state

    @property
    def identity(self):
        return self._state.identity

    def _sign_in(self, identity: Identity) -> SessionSnapshot:
        self._state = SessionSnapshot(checking=False, authenticated=True, identity=identity)
        return self._state

    def bootstrap(self) -> SessionSnapshot:
        """Resolve the initial check. Never raises; only the first call hits the network."""
        if not self._state.checking:
            return self._state
        try:
            payload = self.client.check_auth()
            identity = _identity_from(payload, "check-auth")
        except ApiError as e:
            log.info(f"Session bootstrap resolved unauthenticated: {e}")
            self._state = SIGNED_OUT
            return self._state
        except Exception as e:
            log.error(f"Unexpected failure during session bootstrap: {e}", exc_info=True)
            self._state = SIGNED_OUT
            return self._state
        log.info(f"Session bootstrap resolved user {identity.id}")
        return self._sign_in(identity)

    def _require_bootstrapped(self, operation: str):
        # login/signup/logout never end the checking phase; only bootstrap() does
        if self._state.checking:
            raise SessionNotReadyError(f"Cannot {operation} before the session check has finished")

    def login(self, email: str, password: str) -> SessionSnapshot:
        self._require_bootstrapped("log in")
        payload = self.client.login(email.strip(), password)
        return self._sign_in(_identity_from(payload, "login"))

    def signup(self, fullname: str, email: str, password: str, contact: str) -> SessionSnapshot:
        self._require_bootstrapped("sign up")
        payload = self.client.signup(fullname.strip(), email.strip(), password, contact.strip())
        return self._sign_in(_identity_from(payload, "signup"))

    def logout(self) -> SessionSnapshot:
        """
        Force the local session to signed-out whatever the server answers.
        A remote failure is re-raised after the reset so the caller can say so.
        """
        self._require_bootstrapped("log out")
        try:
            self.client.logout()
        except ApiError as e:
            log.warning(f"Remote logout failed, signing out locally: {e}")
            self._state = SIGNED_OUT
            raise
        self._state = SIGNED_OUT
        return self._state

    def verify_identity(self, code: str) -> SessionSnapshot:
        current = self._state.identity
        if current is None:
            raise SessionNotReadyError("No signed-in user to verify")
        payload = self.client.verify_email(code.strip())
        user = payload.get("user")
        identity = Identity.from_payload(user) if user else current
        return self._sign_in(replace(identity, verified=True))

    def update_identity(self, patch: Dict[str, Any]) -> SessionSnapshot:
        current = self._state.identity
        if current is None:
            raise SessionNotReadyError("No signed-in user to update")
        self.client.update_profile(profile_patch_to_payload(patch))
        return self._sign_in(current.merged(patch))

    def forgot_password(self, email: str) -> str:
        payload = self.client.forgot_password(email.strip())
        return payload.get("message") or "Password reset link sent to your email"

    def reset_password(self, token: str, new_password: str) -> str:
        payload = self.client.reset_password(token, new_password)
        return payload.get("message") or "Password reset successfully"
