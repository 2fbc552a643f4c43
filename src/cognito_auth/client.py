import time
from collections.abc import Callable, Mapping

import structlog
from jwt import PyJWKSet

from cognito_auth.application.ports.identity_provider import IdentityProvider
from cognito_auth.auth.jwks import KeyDirectoryCache
from cognito_auth.auth.jwt_verify import AccessTokenVerifier
from cognito_auth.config.settings import CognitoSettings, get_settings
from cognito_auth.domain.entities.auth_outcome import (
    CHALLENGE_NEW_PASSWORD_REQUIRED,
    AuthenticationResult,
    AuthOutcome,
    Challenged,
)
from cognito_auth.domain.errors import ChallengeOutcomeError
from cognito_auth.domain.services.challenge_flow import ChallengeFlow
from cognito_auth.domain.services.secret_hash import compute_secret_hash
from cognito_auth.domain.value_objects.claims import AccessTokenClaims
from cognito_auth.infrastructure.adapters.http.jwks_directory import HttpKeyDirectory

logger = structlog.get_logger(__name__)


class CognitoAuthClient:
    """Cognito user pool client: login dialogs, account flows and local token checks"""

    def __init__(
        self,
        identity_provider: IdentityProvider,
        settings: CognitoSettings,
        key_cache: KeyDirectoryCache | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self.identity_provider = identity_provider
        self.settings = settings
        self.key_cache = key_cache or KeyDirectoryCache(HttpKeyDirectory(timeout=settings.jwks_timeout_seconds))
        self.verifier = AccessTokenVerifier(self.key_cache, clock=clock or time.time)

    # Authentication dialog

    def authenticate(self, username: str, password: str) -> AuthOutcome:
        """
        Log in with username and password

        Returns:
            Completed with the issued tokens, or Challenged when Cognito
            needs another step (e.g. NEW_PASSWORD_REQUIRED, SMS_MFA)
        """
        self.settings.require("user_pool_id")
        response = self.identity_provider.admin_initiate_auth(
            "ADMIN_NO_SRP_AUTH",
            {
                "USERNAME": username,
                "PASSWORD": password,
                "SECRET_HASH": self.secret_hash(username),
            },
        )
        return self._handle_auth_response(response, username=username)

    def respond_to_auth_challenge(
        self, challenge_name: str, challenge_responses: dict[str, str], session: str | None
    ) -> AuthOutcome:
        self.settings.require("client_id")
        response = self.identity_provider.respond_to_auth_challenge(challenge_name, challenge_responses, session)
        return self._handle_auth_response(response, username=challenge_responses.get("USERNAME"))

    def respond_to_new_password_required_challenge(
        self, username: str, new_password: str, session: str | None
    ) -> AuthOutcome:
        challenge_responses = ChallengeFlow.build_new_password_response(
            username, new_password, self.settings.client_id, self.settings.client_secret
        )
        return self.respond_to_auth_challenge(CHALLENGE_NEW_PASSWORD_REQUIRED, challenge_responses, session)

    def refresh_authentication(self, username: str, refresh_token: str) -> AuthenticationResult:
        """Exchange a refresh token for fresh tokens; there is no challenge path"""
        self.settings.require("user_pool_id")
        response = self.identity_provider.admin_initiate_auth(
            "REFRESH_TOKEN_AUTH",
            {
                "USERNAME": username,
                "REFRESH_TOKEN": refresh_token,
                "SECRET_HASH": self.secret_hash(username),
            },
        )

        auth_result = response.get("AuthenticationResult")
        if not auth_result:
            logger.error("Refresh response carried no authentication result", username=username)
            raise ChallengeOutcomeError(
                "No authentication result in refresh token response",
                details={"response_keys": sorted(response.keys())},
            )
        return AuthenticationResult(raw=dict(auth_result))

    # Account operations

    def change_password(self, access_token: str, previous_password: str, proposed_password: str) -> None:
        self.verify_access_token(access_token)
        self.identity_provider.change_password(access_token, previous_password, proposed_password)

    def delete_user(self, access_token: str) -> None:
        self.verify_access_token(access_token)
        self.identity_provider.delete_user(access_token)

    def register_user(self, username: str, password: str, attributes: Mapping[str, str] | None = None) -> str:
        """Sign up a user and return the new user's sub"""
        user_attributes = [{"Name": key, "Value": value} for key, value in (attributes or {}).items()]
        response = self.identity_provider.sign_up(username, password, self.secret_hash(username), user_attributes)
        return response["UserSub"]

    def confirm_user_registration(self, confirmation_code: str, username: str) -> None:
        self.identity_provider.confirm_sign_up(username, confirmation_code, self.secret_hash(username))

    def resend_registration_confirmation_code(self, username: str) -> None:
        self.identity_provider.resend_confirmation_code(username, self.secret_hash(username))

    def send_forgotten_password_request(self, username: str) -> None:
        self.identity_provider.forgot_password(username, self.secret_hash(username))

    def reset_password(self, confirmation_code: str, username: str, proposed_password: str) -> None:
        self.identity_provider.confirm_forgot_password(
            username, confirmation_code, proposed_password, self.secret_hash(username)
        )

    # Token verification

    def verify_access_token(self, access_token: str) -> str:
        """Verify an access token locally and return its username"""
        return self.verify_access_token_claims(access_token).username

    def verify_access_token_claims(self, access_token: str) -> AccessTokenClaims:
        self.settings.require("region", "user_pool_id")
        return self.verifier.verify_claims(access_token, self.settings.region, self.settings.user_pool_id)

    def get_key_set(self) -> PyJWKSet:
        self.settings.require("region", "user_pool_id")
        return self.key_cache.get_key_set(self.settings.region, self.settings.user_pool_id)

    def set_key_set(self, key_set: PyJWKSet) -> None:
        self.settings.require("region", "user_pool_id")
        self.key_cache.set_key_set(key_set, self.settings.region, self.settings.user_pool_id)

    def invalidate_key_set(self) -> None:
        self.settings.require("region", "user_pool_id")
        self.key_cache.invalidate(self.settings.region, self.settings.user_pool_id)

    def secret_hash(self, username: str) -> str:
        return compute_secret_hash(username, self.settings.client_id, self.settings.client_secret)

    def _handle_auth_response(self, response: dict, username: str | None = None) -> AuthOutcome:
        try:
            outcome = ChallengeFlow.normalize(response)
        except ChallengeOutcomeError as e:
            logger.error("Could not handle authentication response", username=username, details=e.details)
            raise

        if isinstance(outcome, Challenged):
            logger.info("Authentication challenge issued", username=username, challenge=outcome.name)
        else:
            logger.info("Authentication completed", username=username)
        return outcome


def create_cognito_client(settings: CognitoSettings | None = None, boto3_client=None) -> CognitoAuthClient:
    """Build a client backed by boto3 and the Cognito JWKS endpoint"""
    from cognito_auth.infrastructure.adapters.boto3.cognito_client import CognitoIdentityProviderAdapter

    settings = settings or get_settings()
    settings.require("region", "user_pool_id", "client_id")

    identity_provider = CognitoIdentityProviderAdapter(
        user_pool_id=settings.user_pool_id,
        client_id=settings.client_id,
        region=settings.region,
        endpoint_url=settings.endpoint_url,
        client=boto3_client,
    )
    return CognitoAuthClient(identity_provider, settings)
