"""Outcome of an authentication dialog step with the identity provider"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

CHALLENGE_NEW_PASSWORD_REQUIRED = "NEW_PASSWORD_REQUIRED"


class AuthFlowState(Enum):
    """Classification of a raw provider response"""

    PENDING = "pending"
    COMPLETED = "completed"
    CHALLENGED = "challenged"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class AuthenticationResult:
    """Token bag returned by the provider, kept verbatim in ``raw``"""

    raw: dict[str, Any]

    @property
    def access_token(self) -> str | None:
        return self.raw.get("AccessToken")

    @property
    def refresh_token(self) -> str | None:
        return self.raw.get("RefreshToken")

    @property
    def id_token(self) -> str | None:
        return self.raw.get("IdToken")

    @property
    def expires_in(self) -> int | None:
        return self.raw.get("ExpiresIn")

    @property
    def token_type(self) -> str | None:
        return self.raw.get("TokenType")


@dataclass(frozen=True)
class Completed:
    """Authentication finished and tokens were issued"""

    result: AuthenticationResult

    @property
    def state(self) -> AuthFlowState:
        return AuthFlowState.COMPLETED


@dataclass(frozen=True)
class Challenged:
    """Provider requires another step before issuing tokens"""

    name: str
    session: str | None = None
    parameters: dict[str, str] = field(default_factory=dict)

    @property
    def state(self) -> AuthFlowState:
        return AuthFlowState.CHALLENGED

    @property
    def is_new_password_required(self) -> bool:
        return self.name == CHALLENGE_NEW_PASSWORD_REQUIRED

    @property
    def required_attributes(self) -> list[str]:
        """Attributes the user must supply with a NEW_PASSWORD_REQUIRED response"""
        value = self.parameters.get("requiredAttributes")
        if not value:
            return []
        try:
            attributes = json.loads(value)
        except ValueError:
            return []
        return [str(a) for a in attributes] if isinstance(attributes, list) else []


AuthOutcome = Union[Completed, Challenged]
