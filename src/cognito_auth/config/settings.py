# Assumptions:
# - Configuration management using environment variables
# - Pydantic Settings for validation
# - Credentials may be unset at construction and are checked at use time

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cognito_auth.domain.errors import ConfigurationError


class CognitoSettings(BaseSettings):
    """Cognito user pool client settings"""

    model_config = SettingsConfigDict(
        env_prefix="COGNITO_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # User pool
    region: str | None = Field(default=None, validation_alias=AliasChoices("COGNITO_REGION", "AWS_REGION"))
    user_pool_id: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    endpoint_url: str | None = None

    # Public key directory
    jwks_timeout_seconds: float = 5.0

    # Logging
    service_name: str = "cognito-auth"
    log_level: str = "INFO"
    log_format: str = "json"

    # OpenTelemetry
    otel_exporter_otlp_endpoint: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "COGNITO_OTEL_EXPORTER_OTLP_ENDPOINT", "OTEL_EXPORTER_OTLP_ENDPOINT"
        ),
    )

    def require(self, *names: str) -> None:
        """Raise ConfigurationError naming every unset setting"""
        missing = [name for name in names if not getattr(self, name)]
        if missing:
            raise ConfigurationError(
                f"Required setting(s) not configured: {', '.join(missing)}",
                details={"missing": missing},
            )

    @property
    def issuer(self) -> str:
        self.require("region", "user_pool_id")
        return f"https://cognito-idp.{self.region}.amazonaws.com/{self.user_pool_id}"

    @property
    def jwks_url(self) -> str:
        return f"{self.issuer}/.well-known/jwks.json"


@lru_cache()
def get_settings() -> CognitoSettings:
    """Get application settings singleton"""
    return CognitoSettings()
