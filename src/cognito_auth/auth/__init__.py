"""Access token verification utilities."""

from .jwks import KeyDirectoryCache
from .jwt_verify import AccessTokenVerifier, create_access_token_verifier, expected_issuer

__all__ = [
    "AccessTokenVerifier",
    "KeyDirectoryCache",
    "create_access_token_verifier",
    "expected_issuer",
]
