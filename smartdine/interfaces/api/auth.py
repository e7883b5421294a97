"""Auth API routes — register, login, profile and password flows."""

from fastapi import APIRouter, Depends, status

from smartdine.application.services.auth_service import (
    authenticate_user,
    change_password,
    register_user,
    request_password_reset,
    reset_password,
    update_profile,
    verify_email,
)
from smartdine.application.services.token_service import TokenService, get_token_service
from smartdine.config import get_settings
from smartdine.domain.models.user import User
from smartdine.domain.repositories.user_repository import UserRepository
from smartdine.domain.schemas.auth import (
    AuthData,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ProfileUpdate,
    ResetPasswordRequest,
    TokenResponse,
    UserCreate,
    UserProfile,
    UserRead,
)
from smartdine.interfaces.api.deps import get_current_user
from smartdine.interfaces.deps import get_user_repository

settings = get_settings()

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_response(tokens: TokenService, user: User, **extra) -> TokenResponse:
    return TokenResponse(
        token=tokens.issue(user.id),
        data=AuthData(user=UserRead.model_validate(user)),
        **extra,
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: UserCreate,
    repo: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    registration = register_user(repo, body)
    # pending verification token is only handed out in development
    verification_token = registration.verification_token if settings.ENVIRONMENT == "development" else None
    return _token_response(tokens, registration.user, verification_token=verification_token)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    repo: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    user = authenticate_user(repo, body.email, body.password)
    return _token_response(tokens, user)


@router.get("/me")
def get_me(user: User = Depends(get_current_user)):
    profile = UserProfile.model_validate(user)
    profile.restaurants = [r for r in profile.restaurants if r.is_active]
    return {"success": True, "data": {"user": profile}}


@router.put("/profile")
def update_me(
    body: ProfileUpdate,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    user = update_profile(repo, user, body)
    return {"success": True, "data": {"user": UserRead.model_validate(user)}}


@router.put("/change-password", response_model=TokenResponse)
def change_my_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    user = change_password(repo, user, body.current_password, body.new_password)
    return _token_response(tokens, user)


@router.post("/forgot-password")
def forgot_password(
    body: ForgotPasswordRequest,
    repo: UserRepository = Depends(get_user_repository),
):
    token = request_password_reset(repo, body.email)
    response = {"success": True, "message": "Password reset token generated"}
    if settings.ENVIRONMENT == "development":
        response["reset_token"] = token
    return response


@router.put("/reset-password/{token}", response_model=TokenResponse)
def reset_my_password(
    token: str,
    body: ResetPasswordRequest,
    repo: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
):
    user = reset_password(repo, token, body.password)
    return _token_response(tokens, user)


@router.get("/verify-email/{token}", response_model=MessageResponse)
def verify_my_email(token: str, repo: UserRepository = Depends(get_user_repository)):
    verify_email(repo, token)
    return MessageResponse(message="Email verified successfully")


@router.post("/logout", response_model=MessageResponse)
def logout(user: User = Depends(get_current_user)):
    # tokens are stateless; the client discards its copy
    return MessageResponse(message="Logged out successfully")
