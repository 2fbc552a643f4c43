from enum import Enum


class ErrorCode(Enum):
    """Closed set of failure kinds raised by the auth client"""

    # Configuration errors
    CONFIGURATION_MISSING = "CONFIG_001"

    # Key directory errors
    KEY_FETCH_FAILED = "JWKS_001"

    # Token errors
    TOKEN_INVALID = "TOKEN_001"
    TOKEN_EXPIRED = "TOKEN_002"

    # Challenge errors
    CHALLENGE_OUTCOME_INVALID = "CHALLENGE_001"

    # Identity provider errors
    PROVIDER_ERROR = "PROVIDER_001"
    PROVIDER_UNAVAILABLE = "PROVIDER_002"


class CognitoAuthError(Exception):
    """Base exception for auth client errors"""

    def __init__(self, message: str, error_code: ErrorCode | None = None, details: dict | None = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(CognitoAuthError):
    """Raised when a required credential, region or pool identifier is not set"""

    def __init__(self, message: str = "Required configuration is missing", details: dict | None = None):
        super().__init__(message, ErrorCode.CONFIGURATION_MISSING, details)


class KeyFetchError(CognitoAuthError):
    """Raised when the pool's JSON Web Key Set cannot be fetched or parsed"""

    def __init__(self, message: str = "Failed to fetch JWKS", details: dict | None = None):
        super().__init__(message, ErrorCode.KEY_FETCH_FAILED, details)


# Token Errors
class TokenVerificationError(CognitoAuthError):
    """Raised when a token is malformed, badly signed, or carries the wrong claims"""

    def __init__(self, message: str = "could not verify token", details: dict | None = None):
        super().__init__(message, ErrorCode.TOKEN_INVALID, details)


class TokenExpiryError(CognitoAuthError):
    """Raised when an otherwise valid token has expired"""

    def __init__(self, message: str = "invalid exp", details: dict | None = None):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED, details)


class ChallengeOutcomeError(CognitoAuthError):
    """Raised when a provider response holds neither a result nor a challenge"""

    def __init__(
        self,
        message: str = "Could not handle authentication response",
        details: dict | None = None,
    ):
        super().__init__(message, ErrorCode.CHALLENGE_OUTCOME_INVALID, details)


# Identity Provider Errors
class IdentityProviderError(CognitoAuthError):
    """Raised when the identity provider rejects a request"""

    def __init__(self, message: str, provider_error_code: str | None = None, details: dict | None = None):
        self.provider_error_code = provider_error_code
        super().__init__(message, ErrorCode.PROVIDER_ERROR, details)


class ProviderUnavailableError(CognitoAuthError):
    """Raised when the identity provider cannot be reached"""

    def __init__(self, message: str = "Identity provider unavailable", details: dict | None = None):
        super().__init__(message, ErrorCode.PROVIDER_UNAVAILABLE, details)
