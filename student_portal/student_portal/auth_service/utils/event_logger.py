"""
Event logger utility for authentication events.
"""
from datetime import datetime, timezone
from fastapi import Request
from typing import Optional
import sys
import logging
import os

from ..config import settings

# Configure file and stdout logging
log_dir = settings.LOG_DIR

# Create handlers list
handlers = [logging.StreamHandler(sys.stdout)]

# Try to add file handler, but continue without it if directory creation fails
try:
    os.makedirs(log_dir, exist_ok=True)
    handlers.append(logging.FileHandler(os.path.join(log_dir, "auth_events.log")))
except OSError as e:
    print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    handlers=handlers
)

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "signup_success",
    "signup_failure",
    "login_success",
    "login_failure",
}


def client_ip(request: Request) -> Optional[str]:
    """Client address, falling back to the first X-Forwarded-For entry."""
    ip_address = None
    if request.client:
        ip_address = request.client.host

    if not ip_address and request.headers.get("x-forwarded-for"):
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()

    return ip_address


def log_auth_event(
    event_type: str,
    email: str,
    request: Request,
    user_id: Optional[int] = None,
    reason: Optional[str] = None
) -> None:
    """
    Write one log line for an authentication outcome.

    Args:
        event_type: One of: signup_success, signup_failure, login_success,
                    login_failure
        email: Email the request was made for
        request: FastAPI Request object
        user_id: Id of the matched or created user, when known
        reason: Short failure reason, for *_failure events

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    level = logging.WARNING if event_type.endswith("_failure") else logging.INFO
    logger.log(
        level,
        "AUTH %s user_id=%s email=%s ip=%s user_agent=%s reason=%s timestamp=%s",
        event_type,
        user_id,
        email,
        client_ip(request),
        request.headers.get("user-agent"),
        reason,
        datetime.now(timezone.utc).isoformat(),
    )
