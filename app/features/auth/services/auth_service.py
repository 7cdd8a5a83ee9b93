from typing import Any, Dict

from app.features.auth.schemas.auth import AuthUser, LoginResult
from app.features.auth.services.identity_provider import (
    IdentityProviderClient,
    IdentityProviderError,
)
from app.platform.logger import get_logger

logger = get_logger("auth_service")


class AuthService:
    """
    Registration, login and password reset, delegated to the identity provider.
    Provider errors are logged and re-raised unchanged.
    """

    def __init__(self, provider: IdentityProviderClient):
        self.provider = provider

    async def register(self, email: str, password: str) -> AuthUser:
        """
        Register a new user with the provided email and password.

        Raises:
            IdentityProviderError: If the registration fails
        """
        try:
            account = await self.provider.sign_up(email, password)
            uid = _account_uid(account)
        except IdentityProviderError as e:
            logger.error(f"Registration failed for {email}: {e.message}")
            raise

        logger.info(f"Registration successful for {email}")
        return AuthUser(
            uid=uid,
            email=account.get("email", email),
            id_token=account.get("idToken"),
            refresh_token=account.get("refreshToken"),
        )

    async def login(self, email: str, password: str) -> LoginResult:
        """
        Log in a user with the provided email and password.

        Raises:
            IdentityProviderError: If the login fails
        """
        try:
            account = await self.provider.sign_in(email, password)
            uid = _account_uid(account)
        except IdentityProviderError as e:
            logger.error(f"Sign-in failed for {email}: {e.message}")
            raise

        logger.info(f"Login successful for {email}")
        return LoginResult(uid=uid, email=account.get("email", email))

    async def reset_password(self, email: str) -> None:
        """Send a password reset email to the user."""
        try:
            await self.provider.send_password_reset(email)
        except IdentityProviderError as e:
            logger.error(f"Password reset failed for {email}: {e.message}")
            raise

        logger.info(f"Password reset email sent to {email}")


def _account_uid(account: Dict[str, Any]) -> str:
    uid = account.get("localId") if isinstance(account, dict) else None
    if not uid:
        raise IdentityProviderError("Identity provider response is missing localId", status_code=502)
    return uid
