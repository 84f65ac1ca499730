"""
Centralized Observability Infrastructure.
Provides structured logging setup and Sentry SDK initialization
governed entirely by environment variables.
"""

import os
import logging
import re
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

# Patterns to scrub in Sentry events
SENSITIVE_PATTERNS = [
    re.compile(r"(eyJ[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+\.[a-zA-Z0-9_\-]+)"),  # JWT session cookie
    re.compile(r"([a-zA-Z0-9_\-]{30,})"),  # other tokens, DSNs
]
SENSITIVE_KEYS = {"password", "newpassword", "token", "cookie", "cookies", "verificationcode", "authorization"}


def _scrub_sensitive_data(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sentry before_send hook. Recursively scrubs passwords, verification codes
    and the API session cookie from stack locals and request data.
    """

    def _mask_string(val: str) -> str:
        for pattern in SENSITIVE_PATTERNS:
            val = pattern.sub("[REDACTED]", val)
        return val

    def _recursive_scrub(obj: Any) -> Any:
        if isinstance(obj, dict):
            return {
                k: "[REDACTED]" if str(k).lower() in SENSITIVE_KEYS else _recursive_scrub(v)
                for k, v in obj.items()
            }
        elif isinstance(obj, list):
            return [_recursive_scrub(i) for i in obj]
        elif isinstance(obj, str):
            return _mask_string(obj)
        return obj

    try:
        if "exception" in event and "values" in event["exception"]:
            for exc in event["exception"]["values"]:
                if "stacktrace" in exc and "frames" in exc["stacktrace"]:
                    for frame in exc["stacktrace"]["frames"]:
                        if "vars" in frame:
                            frame["vars"] = _recursive_scrub(frame["vars"])
        if "request" in event:
            event["request"] = _recursive_scrub(event["request"])
    except Exception as e:
        log.debug(f"Sentry scrubber failed, sending event as-is: {e}")

    return event


def setup_observability() -> None:
    """
    Initializes global system logging and Sentry (if DSN is present).
    Should be called once at application startup.
    """

    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    # [2026-02-27 15:00:00] INFO    | module.name | The message
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    sentry_dsn = os.getenv("SENTRY_DSN")
    if sentry_dsn:
        import sentry_sdk
        sentry_env = os.getenv("SENTRY_ENV", "development")

        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=sentry_env,
            traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "1.0")),
            send_default_pii=False,
            before_send=_scrub_sensitive_data
        )
        log.info(f"Sentry SDK initialized (env: {sentry_env})")
    else:
        log.info("SENTRY_DSN not provided. Running without Sentry.")

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def bind_user(identity: Optional[Any]) -> None:
    """Attach (or detach) the signed-in user to subsequent Sentry events."""
    import sentry_sdk

    if identity is None:
        sentry_sdk.set_user(None)
        return
    sentry_sdk.set_user({"id": identity.id, "role": "admin" if identity.is_admin else "user"})
