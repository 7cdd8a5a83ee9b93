from fastapi import APIRouter, Depends, status

from app.features.auth.schemas.auth import LoginRequest, PasswordResetRequest, RegisterRequest
from app.features.auth.services.auth_service import AuthService
from app.features.auth.services.identity_provider import IdentityProviderClient
from app.platform.response import api_response

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service() -> AuthService:
    return AuthService(IdentityProviderClient())


@router.post(
    "/register",
    response_model=dict,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a new account with the identity provider"
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    user = await auth_service.register(request.email, request.password)

    return api_response(
        data=user,
        message="Registration successful",
        status_code=status.HTTP_201_CREATED
    )


@router.post(
    "/login",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Login user",
    description="Authenticate user with email and password"
)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    user = await auth_service.login(request.email, request.password)

    return api_response(
        data=user,
        message="Login successful",
        status_code=status.HTTP_200_OK
    )


@router.post(
    "/reset-password",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Send password reset email"
)
async def reset_password(
    request: PasswordResetRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    await auth_service.reset_password(request.email)

    return api_response(
        data=None,
        message="Password reset email sent successfully",
        status_code=status.HTTP_200_OK
    )
