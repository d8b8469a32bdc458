from __future__ import annotations

from fastapi import APIRouter, Depends, Request, status

from knowledge_api.api.schemas.auth import AuthResponse, LoginRequest, SignUpRequest, UserRead, UserResponse
from knowledge_api.core.security import AuthUser  # noqa: TCH001
from knowledge_api.core.services.auth_service import AuthService  # noqa: TCH001
from knowledge_api.core.services.user_service import UserService  # noqa: TCH001
from knowledge_api.dependencies import get_auth_service, get_current_user, get_user_service, rate_limit_by_ip

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignUpRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    """Create an account and return a bearer token for it."""
    rate_limit_by_ip(request, "signup")
    user, token = await service.sign_up(payload)
    return AuthResponse(message="Account created successfully", token=token, user=UserRead.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    rate_limit_by_ip(request, "login")
    user, token = await service.sign_in(payload)
    return AuthResponse(message="Login successful", token=token, user=UserRead.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def me(
    current_user: AuthUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.get_profile(current_user.id)
    return UserResponse(user=UserRead.model_validate(user))
