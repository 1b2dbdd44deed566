"""Verification of identity-provider session tokens."""

from authlib.jose import JsonWebToken
from authlib.jose.errors import JoseError
from fastapi import Request

from newtube.config import get_settings
from newtube.utils.logging import get_logger

logger = get_logger(__name__)

SESSION_COOKIE_NAME = "__session"

_jwt = JsonWebToken(["RS256"])


def extract_session_token(request: Request) -> str | None:
    """Read the session token from the Authorization header or session cookie."""
    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return request.cookies.get(SESSION_COOKIE_NAME)


def verify_session_token(token: str, key: str | None = None) -> str | None:
    """Verify a session JWT and return the external user id (``sub``).

    Returns:
        The identity provider's user id, or None if the token is invalid
    """
    key = key if key is not None else get_settings().clerk_jwt_key
    if not key:
        logger.warning("CLERK_JWT_KEY not configured, treating request as anonymous")
        return None

    try:
        claims = _jwt.decode(token, key)
        claims.validate(leeway=5)
    except (JoseError, ValueError) as e:
        logger.debug(f"Rejected session token: {e}")
        return None

    subject = claims.get("sub")
    return str(subject) if subject else None
