"""Trust boundary for privileged operations.

Operations that call into the content engine may only be requested by the
application's own local content: the packaged ``file:`` origin, or the local
development server origin when debug mode is on.

Browsers send ``Origin: null`` from pages loaded off ``file://`` URLs, so the
literal ``null`` origin counts as packaged content. Request headers are set by
the caller, which is why an access token can be configured on top: the host
places it in the packaged page and every privileged request must echo it.
"""

import secrets
from typing import Optional
from urllib.parse import urlsplit

from loguru import logger

from core.exceptions import UntrustedOriginError

DEV_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})
PACKAGED_ORIGIN = "null"


def is_local_origin(origin: Optional[str], allow_dev_origin: bool = False) -> bool:
    """Check whether a request origin is the application's own content.

    Args:
        origin: Value of the Origin header (or the Referer URL)
        allow_dev_origin: Also trust http(s)://localhost origins

    Returns:
        True if the origin may call privileged operations
    """
    if not origin:
        return False
    if origin == PACKAGED_ORIGIN:
        return True
    try:
        parts = urlsplit(origin)
        hostname = parts.hostname
    except ValueError:
        return False

    if parts.scheme == "file":
        return True
    if allow_dev_origin and parts.scheme in ("http", "https"):
        return hostname in DEV_HOSTS
    return False


def token_matches(expected: Optional[str], supplied: Optional[str]) -> bool:
    """Compare a supplied access token with the configured one.

    No configured token accepts every caller.
    """
    if expected is None:
        return True
    if supplied is None:
        return False
    return secrets.compare_digest(expected.encode("utf-8"), supplied.encode("utf-8"))


def require_local_origin(
    origin: Optional[str],
    operation: str,
    allow_dev_origin: bool = False,
    token: Optional[str] = None,
    expected_token: Optional[str] = None
) -> None:
    """Reject a privileged operation requested from outside the local content.

    Args:
        origin: Origin of the caller
        operation: Name of the privileged operation
        allow_dev_origin: Also trust the local development server
        token: Access token the caller sent
        expected_token: Configured access token, None when not required

    Raises:
        UntrustedOriginError: If the origin is not trusted or the token is wrong
    """
    if not is_local_origin(origin, allow_dev_origin):
        logger.warning(f"Rejected {operation} from untrusted origin {origin!r}")
        raise UntrustedOriginError(origin, operation)
    if not token_matches(expected_token, token):
        logger.warning(f"Rejected {operation} from {origin!r}: missing or wrong access token")
        raise UntrustedOriginError(origin, operation, {"reason": "access token"})
