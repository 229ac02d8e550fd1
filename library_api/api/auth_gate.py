"""Auth Gate — bearer-token guard for protected routes.

Invariants:
    - Missing Authorization header -> 401 "No token provided"
    - Empty token after stripping the optional "Bearer " prefix -> 401
    - Any verification failure (signature, expiry, claims) -> 401; the route
      handler is never invoked
    - On success the caller identity is returned as an AuthContext value and
      passed to the handler as a parameter; the request object is not mutated
"""

import logging

from fastapi import Depends, Request

from library_api.config import Settings, get_settings
from library_api.core.credentials import verify_token
from library_api.core.domain_types import AuthContext
from library_api.core.errors import InvalidTokenError, UnauthorizedError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_token(authorization: str | None) -> str:
    """Pull the raw token out of an Authorization header value."""
    if not authorization:
        raise UnauthorizedError("No token provided")
    token = (
        authorization[len(BEARER_PREFIX):]
        if authorization.startswith(BEARER_PREFIX)
        else authorization
    ).strip()
    if not token:
        raise UnauthorizedError("Invalid token format")
    return token


def require_auth(
    request: Request, settings: Settings = Depends(get_settings),
) -> AuthContext:
    """FastAPI dependency: verified caller identity or 401."""
    token = extract_token(request.headers.get("Authorization"))
    try:
        claims = verify_token(token, settings.jwt_secret, settings.jwt_algorithm)
    except InvalidTokenError as e:
        logger.warning(
            f"Rejected token: {e.reason}", extra={"path": request.url.path},
        )
        raise UnauthorizedError("Invalid or expired token")
    return AuthContext.from_claims(claims)
