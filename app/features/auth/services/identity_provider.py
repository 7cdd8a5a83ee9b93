"""
Identity provider client.

Talks to an Identity Toolkit compatible REST API (Firebase Authentication)
for account creation, password sign-in and password reset emails.
"""
from typing import Any, Dict, Optional, Tuple

import httpx

from app.platform.config import settings

# Provider error codes mapped to HTTP status codes for API responses
PROVIDER_ERROR_STATUS = {
    "EMAIL_EXISTS": 409,
    "EMAIL_NOT_FOUND": 401,
    "INVALID_PASSWORD": 401,
    "INVALID_LOGIN_CREDENTIALS": 401,
    "USER_DISABLED": 403,
    "TOO_MANY_ATTEMPTS_TRY_LATER": 429,
    "OPERATION_NOT_ALLOWED": 403,
}


class IdentityProviderError(Exception):
    """Error returned by (or while reaching) the identity provider."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class IdentityProviderClient:

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.IDENTITY_API_KEY
        self.base_url = (base_url or settings.IDENTITY_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.IDENTITY_TIMEOUT
        self.transport = transport

    async def sign_up(self, email: str, password: str) -> Dict[str, Any]:
        return await self._post(
            "accounts:signUp",
            {"email": email, "password": password, "returnSecureToken": True},
            required=("localId",),
        )

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        return await self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
            required=("localId",),
        )

    async def send_password_reset(self, email: str) -> Dict[str, Any]:
        return await self._post(
            "accounts:sendOobCode",
            {"requestType": "PASSWORD_RESET", "email": email},
        )

    async def _post(
        self, endpoint: str, payload: Dict[str, Any], required: Tuple[str, ...] = ()
    ) -> Dict[str, Any]:
        if not self.api_key:
            raise IdentityProviderError("Identity provider not configured", status_code=500)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/{endpoint}",
                    params={"key": self.api_key},
                    json=payload,
                )
        except httpx.TimeoutException as e:
            raise IdentityProviderError("Identity provider timeout", status_code=504) from e
        except httpx.HTTPError as e:
            raise IdentityProviderError(f"Identity provider unreachable: {e}", status_code=502) from e

        if not response.is_success:
            raise _error_from_response(response)

        try:
            account = response.json()
        except ValueError as e:
            raise IdentityProviderError("Identity provider returned an invalid response", status_code=502) from e

        if not isinstance(account, dict):
            raise IdentityProviderError("Identity provider returned an invalid response", status_code=502)
        missing = [key for key in required if not account.get(key)]
        if missing:
            raise IdentityProviderError(
                f"Identity provider response is missing {', '.join(missing)}", status_code=502
            )

        return account


def _error_from_response(response: httpx.Response) -> IdentityProviderError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        error = {}

    # Messages look like "WEAK_PASSWORD : Password should be at least 6 characters"
    message = error.get("message") or response.text or "Identity provider error"
    code = message.split(" : ")[0].strip()
    status_code = PROVIDER_ERROR_STATUS.get(code)
    if status_code is None:
        status_code = response.status_code if response.status_code < 500 else 502

    return IdentityProviderError(message, status_code=status_code)
