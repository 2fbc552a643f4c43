from collections.abc import Mapping
from typing import Any

from cognito_auth.domain.entities.auth_outcome import (
    CHALLENGE_NEW_PASSWORD_REQUIRED,
    AuthenticationResult,
    AuthFlowState,
    AuthOutcome,
    Challenged,
    Completed,
)
from cognito_auth.domain.errors import ChallengeOutcomeError
from cognito_auth.domain.services.secret_hash import compute_secret_hash


class ChallengeFlow:
    """Turns raw InitiateAuth / RespondToAuthChallenge responses into outcomes"""

    @staticmethod
    def classify(response: Mapping[str, Any] | None) -> AuthFlowState:
        if response is None:
            return AuthFlowState.PENDING
        if response.get("AuthenticationResult"):
            return AuthFlowState.COMPLETED
        if response.get("ChallengeName"):
            return AuthFlowState.CHALLENGED
        return AuthFlowState.MALFORMED

    @staticmethod
    def normalize(response: Mapping[str, Any]) -> AuthOutcome:
        """
        Normalize a raw provider response

        Args:
            response: Raw response carrying either ``AuthenticationResult`` or
                ``ChallengeName`` / ``Session`` / ``ChallengeParameters``

        Returns:
            Completed with the result verbatim, or Challenged

        Raises:
            ChallengeOutcomeError: If the response holds neither
        """
        state = ChallengeFlow.classify(response)

        if state is AuthFlowState.COMPLETED:
            return Completed(result=AuthenticationResult(raw=dict(response["AuthenticationResult"])))

        if state is AuthFlowState.CHALLENGED:
            return Challenged(
                name=response["ChallengeName"],
                session=response.get("Session"),
                parameters=dict(response.get("ChallengeParameters") or {}),
            )

        keys = sorted(response.keys()) if response is not None else []
        raise ChallengeOutcomeError(details={"response_keys": keys})

    @staticmethod
    def build_new_password_response(
        username: str, new_password: str, client_id: str | None, client_secret: str | None
    ) -> dict[str, str]:
        """Challenge responses for NEW_PASSWORD_REQUIRED"""
        return {
            "NEW_PASSWORD": new_password,
            "USERNAME": username,
            "SECRET_HASH": compute_secret_hash(username, client_id, client_secret),
        }


def normalize(response: Mapping[str, Any]) -> AuthOutcome:
    return ChallengeFlow.normalize(response)


__all__ = ["CHALLENGE_NEW_PASSWORD_REQUIRED", "ChallengeFlow", "normalize"]
