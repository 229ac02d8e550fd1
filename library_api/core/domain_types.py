"""Domain Types — identity types and value objects shared across layers.

Invariants:
    - UserId, BookId, GenreId, OrderId wrap UUIDs
    - TokenClaims and AuthContext are immutable (frozen dataclasses)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - AuthContext is passed to handlers as an explicit parameter, never stored on the request
"""

from dataclasses import dataclass
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
GenreId = NewType("GenreId", UUID)
BookId = NewType("BookId", UUID)
OrderId = NewType("OrderId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

UNKNOWN_GENRE = "Unknown"


@dataclass(frozen=True)
class TokenClaims:
    """Identity payload embedded in a signed token."""
    user_id: UserId
    email: str


@dataclass(frozen=True)
class AuthContext:
    """Authenticated caller, produced by the auth gate."""
    user_id: UserId
    email: str

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "AuthContext":
        return cls(user_id=claims.user_id, email=claims.email)
