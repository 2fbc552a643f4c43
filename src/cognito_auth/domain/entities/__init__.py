from .auth_outcome import (
    CHALLENGE_NEW_PASSWORD_REQUIRED,
    AuthenticationResult,
    AuthFlowState,
    AuthOutcome,
    Challenged,
    Completed,
)

__all__ = [
    "CHALLENGE_NEW_PASSWORD_REQUIRED",
    "AuthenticationResult",
    "AuthFlowState",
    "AuthOutcome",
    "Challenged",
    "Completed",
]
