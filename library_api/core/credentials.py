"""Credential Service — password hashing and signed-token issuance/verification.

Invariants:
    - Pure functions over input bytes; no IO, no settings lookup
    - bcrypt work factor fixed at 10
    - verify_token raises InvalidTokenError for every failure mode

Design Decisions:
    - bcrypt used directly (no passlib wrapper)
    - Passwords truncated to 72 UTF-8 bytes before hashing: bcrypt ignores the
      rest anyway and current releases raise instead of truncating
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from library_api.core.domain_types import TokenClaims, UserId
from library_api.core.errors import InvalidTokenError

BCRYPT_ROUNDS = 10
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """One-way salted hash of a plaintext password."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(
            _password_bytes(password), hashed_password.encode("utf-8"),
        )
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def issue_token(
    claims: TokenClaims,
    secret: str,
    algorithm: str = "HS256",
    expires_minutes: int = 60 * 24,
) -> str:
    """Sign a time-bounded token carrying userId and email."""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": str(claims.user_id),
        "email": claims.email,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(token: str, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """Decode and validate a token. Raises InvalidTokenError."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError:
        raise InvalidTokenError("token expired")
    except JWTError as e:
        raise InvalidTokenError(str(e) or "malformed token")

    user_id = payload.get("userId")
    email = payload.get("email")
    if not user_id or not email:
        raise InvalidTokenError("missing claims")
    try:
        return TokenClaims(user_id=UserId(UUID(str(user_id))), email=email)
    except ValueError:
        raise InvalidTokenError("malformed userId claim")
