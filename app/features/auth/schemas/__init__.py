from .auth import AuthUser, LoginRequest, LoginResult, PasswordResetRequest, RegisterRequest

__all__ = [
    "AuthUser",
    "LoginRequest",
    "LoginResult",
    "PasswordResetRequest",
    "RegisterRequest",
]
