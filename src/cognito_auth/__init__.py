"""
Cognito user pool authentication client.

This library provides:
- Password and refresh token login with challenge handling
- Local verification of Cognito access tokens against the pool's JWKS
- Secret hash calculation for app clients with a client secret
- Logging, telemetry and configuration helpers
"""

from .client import CognitoAuthClient, create_cognito_client
from .domain.entities import AuthenticationResult, AuthOutcome, Challenged, Completed
from .domain.errors import (
    ChallengeOutcomeError,
    CognitoAuthError,
    ConfigurationError,
    ErrorCode,
    IdentityProviderError,
    KeyFetchError,
    ProviderUnavailableError,
    TokenExpiryError,
    TokenVerificationError,
)

__version__ = "1.0.0"
__author__ = "BPT Team"

__all__ = [
    "CognitoAuthClient",
    "create_cognito_client",
    "AuthenticationResult",
    "AuthOutcome",
    "Challenged",
    "Completed",
    "CognitoAuthError",
    "ConfigurationError",
    "ErrorCode",
    "KeyFetchError",
    "TokenVerificationError",
    "TokenExpiryError",
    "ChallengeOutcomeError",
    "IdentityProviderError",
    "ProviderUnavailableError",
]
