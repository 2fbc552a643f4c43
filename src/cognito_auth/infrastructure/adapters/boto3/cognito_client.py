from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from cognito_auth.application.ports.identity_provider import IdentityProvider
from cognito_auth.domain.errors import IdentityProviderError, ProviderUnavailableError
from cognito_auth.logging import mask
from cognito_auth.telemetry import get_tracer

logger = structlog.get_logger(__name__)
tracer = get_tracer(__name__)


class CognitoIdentityProviderAdapter(IdentityProvider):
    """AWS Cognito identity provider adapter using boto3"""

    def __init__(
        self,
        user_pool_id: str,
        client_id: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        client=None,
    ):
        self.user_pool_id = user_pool_id
        self.client_id = client_id
        self.region = region

        if client is None:
            # Configure boto3 client with optional endpoint URL for localstack
            client_config = {"region_name": region}
            if endpoint_url:
                client_config["endpoint_url"] = endpoint_url
            client = boto3.client("cognito-idp", **client_config)

        self.client = client

        logger.info(
            "Cognito client initialized",
            user_pool_id=mask(user_pool_id, 15),
            client_id=mask(client_id),
            region=region,
            endpoint_url=endpoint_url,
        )

    def admin_initiate_auth(self, auth_flow: str, auth_parameters: dict[str, str]) -> dict[str, Any]:
        """Initiate authentication with Cognito"""
        response = self._call(
            "admin_initiate_auth",
            AuthFlow=auth_flow,
            AuthParameters=auth_parameters,
            ClientId=self.client_id,
            UserPoolId=self.user_pool_id,
        )
        logger.debug("Cognito auth initiated", username=auth_parameters.get("USERNAME"), auth_flow=auth_flow)
        return response

    def respond_to_auth_challenge(
        self, challenge_name: str, challenge_responses: dict[str, str], session: str | None
    ) -> dict[str, Any]:
        """Respond to an authentication challenge"""
        params = {
            "ChallengeName": challenge_name,
            "ChallengeResponses": challenge_responses,
            "ClientId": self.client_id,
        }
        if session is not None:
            params["Session"] = session

        response = self._call("respond_to_auth_challenge", **params)
        logger.debug(
            "Cognito challenge response",
            username=challenge_responses.get("USERNAME"),
            challenge=challenge_name,
        )
        return response

    def change_password(self, access_token: str, previous_password: str, proposed_password: str) -> None:
        self._call(
            "change_password",
            AccessToken=access_token,
            PreviousPassword=previous_password,
            ProposedPassword=proposed_password,
        )
        logger.info("Password changed")

    def sign_up(
        self,
        username: str,
        password: str,
        secret_hash: str,
        user_attributes: list[dict[str, str]],
    ) -> dict[str, Any]:
        """Sign up a new user"""
        response = self._call(
            "sign_up",
            ClientId=self.client_id,
            Password=password,
            SecretHash=secret_hash,
            UserAttributes=user_attributes,
            Username=username,
        )
        logger.info("User signed up", username=username)
        return response

    def confirm_sign_up(self, username: str, confirmation_code: str, secret_hash: str) -> None:
        """Confirm user sign up with verification code"""
        self._call(
            "confirm_sign_up",
            ClientId=self.client_id,
            ConfirmationCode=confirmation_code,
            SecretHash=secret_hash,
            Username=username,
        )
        logger.info("User signup confirmed", username=username)

    def resend_confirmation_code(self, username: str, secret_hash: str) -> dict[str, Any]:
        """Resend confirmation code"""
        response = self._call(
            "resend_confirmation_code",
            ClientId=self.client_id,
            SecretHash=secret_hash,
            Username=username,
        )
        logger.info("Confirmation code resent", username=username)
        return response

    def forgot_password(self, username: str, secret_hash: str) -> dict[str, Any]:
        """Initiate forgot password flow"""
        response = self._call(
            "forgot_password",
            ClientId=self.client_id,
            SecretHash=secret_hash,
            Username=username,
        )
        logger.info("Forgot password initiated", username=username)
        return response

    def confirm_forgot_password(
        self, username: str, confirmation_code: str, password: str, secret_hash: str
    ) -> None:
        """Confirm forgot password with new password"""
        self._call(
            "confirm_forgot_password",
            ClientId=self.client_id,
            ConfirmationCode=confirmation_code,
            Password=password,
            SecretHash=secret_hash,
            Username=username,
        )
        logger.info("Password reset confirmed", username=username)

    def delete_user(self, access_token: str) -> None:
        self._call("delete_user", AccessToken=access_token)
        logger.info("User deleted")

    def _call(self, operation: str, **params) -> dict[str, Any]:
        with tracer.start_as_current_span(f"cognito.{operation}") as span:
            span.set_attribute("rpc.service", "cognito-idp")
            span.set_attribute("rpc.method", operation)
            try:
                response = getattr(self.client, operation)(**params)
            except ClientError as e:
                error = e.response.get("Error", {})
                code = error.get("Code")
                logger.error("Cognito request failed", operation=operation, error_code=code, error=str(e))
                raise IdentityProviderError(
                    error.get("Message") or str(e),
                    provider_error_code=code,
                    details={"operation": operation},
                ) from e
            except BotoCoreError as e:
                logger.error("Cognito unreachable", operation=operation, error=str(e))
                raise ProviderUnavailableError(f"Cognito {operation} failed: {e}") from e

        response = dict(response or {})
        response.pop("ResponseMetadata", None)
        return response
