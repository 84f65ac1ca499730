"""Route gate orchestration (application layer)."""

from dataclasses import dataclass
from typing import Literal, Optional

from use_cases import access_policy
from utils import session_manager

AuthFlowStatus = Literal["CONTINUE", "WAIT", "REDIRECT"]


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for route gating."""

    status: AuthFlowStatus
    reason: str
    redirect_to: Optional[str] = None
    user_id: Optional[str] = None


def ensure_access(path: str) -> AuthFlowResult:
    """Evaluate the route's requirement against the current session and return a control-flow status."""
    session_manager.init_session_state()
    snapshot = session_manager.current_snapshot()
    decision = access_policy.decide_route(snapshot, path)
    user_id = snapshot.identity.id if snapshot.identity is not None else None

    if decision.status == "CHECKING":
        return AuthFlowResult(status="WAIT", reason="checking")

    if decision.status == "REDIRECT":
        if decision.reason != "already_authenticated":
            import auth
            from infrastructure.repositories.sqlite_audit_repository import AuditAction

            auth.get_audit_repo().log_action(
                AuditAction.ACCESS_DENIED,
                target_type="route",
                actor_user_id=user_id,
                actor_role="admin" if snapshot.identity is not None and snapshot.identity.is_admin else None,
                target_id=path,
                metadata={"reason": decision.reason, "redirect_to": decision.redirect_to},
                result="deny",
            )
        return AuthFlowResult(
            status="REDIRECT", reason=decision.reason or "redirect", redirect_to=decision.redirect_to, user_id=user_id
        )

    return AuthFlowResult(status="CONTINUE", reason="allowed", user_id=user_id)
