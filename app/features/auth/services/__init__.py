from .auth_service import AuthService
from .identity_provider import IdentityProviderClient, IdentityProviderError

__all__ = ["AuthService", "IdentityProviderClient", "IdentityProviderError"]
