"""Startup orchestration for storage init and the one-time session check."""

from dataclasses import dataclass
from typing import Literal, Tuple

import logging

import auth
from utils import session_manager

log = logging.getLogger(__name__)

StartupStatus = Literal["CONTINUE", "STOP"]


@dataclass(frozen=True)
class StartupResult:
    """Result contract for startup/bootstrap orchestration."""

    status: StartupStatus
    planned_steps: Tuple[str, ...]


def run_startup() -> StartupResult:
    """Init storage and per-session state, then resolve the session check once per browser session."""
    executed_steps = []

    try:
        auth.init_storage()
        executed_steps.append("init_storage")
    except Exception as e:
        # Without the cart/audit DBs the app cannot keep its guarantees.
        log.error(f"Storage initialisation failed: {e}", exc_info=True)
        return StartupResult(status="STOP", planned_steps=tuple(executed_steps))

    session_manager.init_session_state()
    executed_steps.append("init_session_state")

    authority = session_manager.get_authority()
    if authority.snapshot().checking:
        session_manager.restore_api_cookie()
        executed_steps.append("restore_api_cookie")
        authority.bootstrap()
        executed_steps.append("bootstrap_session")

    session_manager.bind_cart_to_identity()
    executed_steps.append("bind_cart")

    return StartupResult(status="CONTINUE", planned_steps=tuple(executed_steps))
