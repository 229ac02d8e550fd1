"""Auth Service — registration, login and profile lookup.

Invariants:
    - Passwords stored only as bcrypt hashes
    - Unknown email and wrong password produce the same 401 (email existence not leaked)
    - Email uniqueness: advisory pre-check here, store unique constraint is final
"""

import logging

from library_api.core.credentials import hash_password, issue_token, verify_password
from library_api.core.domain_types import AuthContext, TokenClaims, UserId
from library_api.core.errors import (
    ConflictError, ResourceNotFoundError, UnauthorizedError,
)
from library_api.core.repository_protocols import UserRepository
from library_api.models import User
from library_api.schemas.auth import (
    LoginRequest, LoginResponse, RegisterRequest, UserProfileResponse,
    UserResponse, UserSummary,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        jwt_secret: str,
        jwt_algorithm: str = "HS256",
        jwt_expires_minutes: int = 60 * 24,
    ):
        self._users = users
        self._jwt_secret = jwt_secret
        self._jwt_algorithm = jwt_algorithm
        self._jwt_expires_minutes = jwt_expires_minutes

    async def register(self, body: RegisterRequest) -> UserResponse:
        if await self._users.get_by_email(body.email):
            raise ConflictError("Email already registered", field="email")

        user = await self._users.add(User(
            email=body.email,
            password_hash=hash_password(body.password),
            username=body.username or None,
        ))
        logger.info(f"User registered: {user.id}", extra={"user_id": str(user.id)})
        return UserResponse.model_validate(user)

    async def login(self, body: LoginRequest) -> LoginResponse:
        user = await self._users.get_by_email(body.email)
        if not user or not verify_password(body.password, user.password_hash):
            logger.warning("Failed login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token = issue_token(
            TokenClaims(user_id=UserId(user.id), email=user.email),
            self._jwt_secret,
            algorithm=self._jwt_algorithm,
            expires_minutes=self._jwt_expires_minutes,
        )
        return LoginResponse(token=token, user=UserSummary.model_validate(user))

    async def me(self, auth: AuthContext) -> UserProfileResponse:
        user = await self._users.get(auth.user_id)
        if not user:
            raise ResourceNotFoundError("User", auth.user_id)
        return UserProfileResponse.model_validate(user)
