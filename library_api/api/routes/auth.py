"""Auth Routes — register, login and current-user profile."""


from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from library_api.api.auth_gate import require_auth
from library_api.api.dependencies import get_auth_service
from library_api.core.domain_types import AuthContext
from library_api.schemas.auth import LoginRequest, RegisterRequest
from library_api.schemas.envelope import success_response
from library_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest, service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    user = await service.register(body)
    return success_response(
        "User registered successfully", user, status.HTTP_201_CREATED,
    )


@router.post("/login")
async def login(
    body: LoginRequest, service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    return success_response("Login successful", await service.login(body))


@router.get("/me")
async def me(
    auth: AuthContext = Depends(require_auth),
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    profile = await service.me(auth)
    return success_response("User profile retrieved successfully", profile)
