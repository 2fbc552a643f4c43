from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AccessTokenClaims:
    """Value object for verified access token claims"""

    iss: str  # Issuer
    token_use: str  # "access" for access tokens
    exp: int  # Expiration time
    username: str

    # Remaining payload, e.g. sub, client_id, scope, auth_time
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def sub(self) -> str | None:
        return self.extra.get("sub")

    @property
    def client_id(self) -> str | None:
        return self.extra.get("client_id")

    @property
    def scopes(self) -> list[str]:
        scope = self.extra.get("scope")
        return scope.split() if scope else []
