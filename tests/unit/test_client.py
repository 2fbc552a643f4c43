# Assumptions:
# - Using pytest for testing framework
# - Identity provider port mocked; key set injected so no JWKS fetch happens
# - Testing dialog normalization, secret hashes and token-gated operations

from unittest.mock import Mock

import pytest
from conftest import CLIENT_ID, CLIENT_SECRET, REGION, USER_POOL_ID

from cognito_auth.application.ports.identity_provider import IdentityProvider
from cognito_auth.client import CognitoAuthClient, create_cognito_client
from cognito_auth.config.settings import CognitoSettings
from cognito_auth.domain.entities.auth_outcome import AuthenticationResult, Challenged, Completed
from cognito_auth.domain.errors import (
    ChallengeOutcomeError,
    ConfigurationError,
    TokenExpiryError,
    TokenVerificationError,
)
from cognito_auth.domain.services.secret_hash import compute_secret_hash
from cognito_auth.infrastructure.adapters.boto3.cognito_client import CognitoIdentityProviderAdapter

NOW = 1_700_000_000
SESSION = "AYABeEXAMPLEsessionTokenFromCognito0123456789"


@pytest.fixture
def settings():
    return CognitoSettings(
        region=REGION,
        user_pool_id=USER_POOL_ID,
        client_id=CLIENT_ID,
        client_secret=CLIENT_SECRET,
        _env_file=None,
    )


@pytest.fixture
def mock_identity_provider():
    return Mock(spec=IdentityProvider)


@pytest.fixture
def client(mock_identity_provider, settings, key_set):
    client = CognitoAuthClient(mock_identity_provider, settings, clock=lambda: NOW)
    client.set_key_set(key_set)
    return client


def expected_hash(username: str) -> str:
    return compute_secret_hash(username, CLIENT_ID, CLIENT_SECRET)


class TestAuthenticate:
    """Test cases for the login dialog"""

    def test_completed(self, client, mock_identity_provider):
        """Test a direct token response completes"""
        mock_identity_provider.admin_initiate_auth.return_value = {
            "AuthenticationResult": {"AccessToken": "a", "RefreshToken": "r", "IdToken": "i", "ExpiresIn": 3600}
        }

        outcome = client.authenticate("jane", "Passw0rd!")

        assert isinstance(outcome, Completed)
        assert outcome.result.refresh_token == "r"
        mock_identity_provider.admin_initiate_auth.assert_called_once_with(
            "ADMIN_NO_SRP_AUTH",
            {"USERNAME": "jane", "PASSWORD": "Passw0rd!", "SECRET_HASH": expected_hash("jane")},
        )

    def test_challenged(self, client, mock_identity_provider):
        """Test a challenge response is surfaced, not raised"""
        mock_identity_provider.admin_initiate_auth.return_value = {
            "ChallengeName": "NEW_PASSWORD_REQUIRED",
            "Session": SESSION,
            "ChallengeParameters": {"USER_ID_FOR_SRP": "jane"},
        }

        outcome = client.authenticate("jane", "Passw0rd!")

        assert outcome == Challenged("NEW_PASSWORD_REQUIRED", SESSION, {"USER_ID_FOR_SRP": "jane"})

    def test_malformed_response(self, client, mock_identity_provider):
        """Test a response with neither result nor challenge fails"""
        mock_identity_provider.admin_initiate_auth.return_value = {}

        with pytest.raises(ChallengeOutcomeError):
            client.authenticate("jane", "Passw0rd!")

    def test_missing_client_secret(self, mock_identity_provider):
        """Test login without a client secret is a configuration error"""
        settings = CognitoSettings(
            region=REGION, user_pool_id=USER_POOL_ID, client_id=CLIENT_ID, _env_file=None
        )
        client = CognitoAuthClient(mock_identity_provider, settings)

        with pytest.raises(ConfigurationError):
            client.authenticate("jane", "Passw0rd!")

        mock_identity_provider.admin_initiate_auth.assert_not_called()


class TestChallengeResponses:
    """Test cases for continuing a dialog"""

    def test_respond_to_auth_challenge(self, client, mock_identity_provider):
        """Test arbitrary challenges are relayed and normalized"""
        mock_identity_provider.respond_to_auth_challenge.return_value = {
            "AuthenticationResult": {"AccessToken": "a"}
        }
        responses = {"USERNAME": "jane", "SMS_MFA_CODE": "123456", "SECRET_HASH": expected_hash("jane")}

        outcome = client.respond_to_auth_challenge("SMS_MFA", responses, SESSION)

        assert isinstance(outcome, Completed)
        mock_identity_provider.respond_to_auth_challenge.assert_called_once_with("SMS_MFA", responses, SESSION)

    def test_new_password_required(self, client, mock_identity_provider):
        """Test the new password response carries the secret hash"""
        mock_identity_provider.respond_to_auth_challenge.return_value = {
            "AuthenticationResult": {"AccessToken": "a"}
        }

        outcome = client.respond_to_new_password_required_challenge("jane", "N3w-Passw0rd!", SESSION)

        assert isinstance(outcome, Completed)
        mock_identity_provider.respond_to_auth_challenge.assert_called_once_with(
            "NEW_PASSWORD_REQUIRED",
            {"NEW_PASSWORD": "N3w-Passw0rd!", "USERNAME": "jane", "SECRET_HASH": expected_hash("jane")},
            SESSION,
        )

    def test_new_password_can_lead_to_another_challenge(self, client, mock_identity_provider):
        """Test a follow-up challenge is surfaced the same way"""
        mock_identity_provider.respond_to_auth_challenge.return_value = {
            "ChallengeName": "MFA_SETUP",
            "Session": SESSION,
        }

        outcome = client.respond_to_new_password_required_challenge("jane", "N3w-Passw0rd!", SESSION)

        assert outcome == Challenged("MFA_SETUP", SESSION, {})


class TestRefreshAuthentication:
    """Test cases for the refresh token flow"""

    def test_returns_authentication_result(self, client, mock_identity_provider):
        """Test refresh returns the token bag"""
        mock_identity_provider.admin_initiate_auth.return_value = {
            "AuthenticationResult": {"AccessToken": "new-access", "ExpiresIn": 3600, "TokenType": "Bearer"}
        }

        result = client.refresh_authentication("jane", "refresh-token")

        assert isinstance(result, AuthenticationResult)
        assert result.access_token == "new-access"
        mock_identity_provider.admin_initiate_auth.assert_called_once_with(
            "REFRESH_TOKEN_AUTH",
            {"USERNAME": "jane", "REFRESH_TOKEN": "refresh-token", "SECRET_HASH": expected_hash("jane")},
        )

    def test_missing_result(self, client, mock_identity_provider):
        """Test refresh has no challenge path"""
        mock_identity_provider.admin_initiate_auth.return_value = {"ChallengeName": "SMS_MFA", "Session": SESSION}

        with pytest.raises(ChallengeOutcomeError):
            client.refresh_authentication("jane", "refresh-token")


class TestAccountOperations:
    """Test cases for registration and password operations"""

    def test_register_user(self, client, mock_identity_provider):
        """Test attributes are converted to Name/Value pairs"""
        mock_identity_provider.sign_up.return_value = {"UserSub": "sub-123", "UserConfirmed": False}

        user_sub = client.register_user("jane", "Passw0rd!", {"email": "jane@example.com", "name": "Jane"})

        assert user_sub == "sub-123"
        mock_identity_provider.sign_up.assert_called_once_with(
            "jane",
            "Passw0rd!",
            expected_hash("jane"),
            [{"Name": "email", "Value": "jane@example.com"}, {"Name": "name", "Value": "Jane"}],
        )

    def test_register_user_without_attributes(self, client, mock_identity_provider):
        mock_identity_provider.sign_up.return_value = {"UserSub": "sub-123"}

        client.register_user("jane", "Passw0rd!")

        assert mock_identity_provider.sign_up.call_args.args[3] == []

    def test_confirm_user_registration(self, client, mock_identity_provider):
        client.confirm_user_registration("123456", "jane")

        mock_identity_provider.confirm_sign_up.assert_called_once_with("jane", "123456", expected_hash("jane"))

    def test_resend_registration_confirmation_code(self, client, mock_identity_provider):
        client.resend_registration_confirmation_code("jane")

        mock_identity_provider.resend_confirmation_code.assert_called_once_with("jane", expected_hash("jane"))

    def test_send_forgotten_password_request(self, client, mock_identity_provider):
        client.send_forgotten_password_request("jane")

        mock_identity_provider.forgot_password.assert_called_once_with("jane", expected_hash("jane"))

    def test_reset_password(self, client, mock_identity_provider):
        client.reset_password("654321", "jane", "N3w-Passw0rd!")

        mock_identity_provider.confirm_forgot_password.assert_called_once_with(
            "jane", "654321", "N3w-Passw0rd!", expected_hash("jane")
        )

    def test_change_password_verifies_token_first(self, client, mock_identity_provider, make_token):
        """Test a valid token is forwarded to the provider"""
        token = make_token(exp=NOW + 60)

        client.change_password(token, "Old-Passw0rd!", "N3w-Passw0rd!")

        mock_identity_provider.change_password.assert_called_once_with(token, "Old-Passw0rd!", "N3w-Passw0rd!")

    def test_change_password_rejects_expired_token(self, client, mock_identity_provider, make_token):
        """Test an expired token never reaches the provider"""
        with pytest.raises(TokenExpiryError):
            client.change_password(make_token(exp=NOW - 1), "Old-Passw0rd!", "N3w-Passw0rd!")

        mock_identity_provider.change_password.assert_not_called()

    def test_delete_user_rejects_id_token(self, client, mock_identity_provider, make_token):
        """Test only access tokens may delete a user"""
        with pytest.raises(TokenVerificationError, match="invalid token_use"):
            client.delete_user(make_token(token_use="id", exp=NOW + 60))

        mock_identity_provider.delete_user.assert_not_called()

    def test_delete_user(self, client, mock_identity_provider, make_token):
        token = make_token(exp=NOW + 60)

        client.delete_user(token)

        mock_identity_provider.delete_user.assert_called_once_with(token)


class TestTokenVerification:
    """Test cases for local token verification through the client"""

    def test_verify_access_token(self, client, make_token):
        assert client.verify_access_token(make_token(exp=NOW + 60)) == "jane.doe"

    def test_verify_access_token_claims(self, client, make_token):
        claims = client.verify_access_token_claims(make_token(exp=NOW + 60))

        assert claims.sub == "9f0c1a2b-user-sub"

    def test_get_key_set_returns_injected_set(self, client, key_set):
        assert client.get_key_set() is key_set

    def test_invalidate_key_set(self, mock_identity_provider, settings, key_set):
        """Test invalidation drops the injected set so the next call fetches"""
        key_cache = Mock()
        client = CognitoAuthClient(mock_identity_provider, settings, key_cache=key_cache)

        client.invalidate_key_set()

        key_cache.invalidate.assert_called_once_with(REGION, USER_POOL_ID)

    def test_missing_pool_configuration(self, mock_identity_provider):
        """Test verification without region or pool is a configuration error"""
        client = CognitoAuthClient(mock_identity_provider, CognitoSettings(_env_file=None))

        with pytest.raises(ConfigurationError) as exc_info:
            client.verify_access_token("a.b.c")

        assert exc_info.value.details["missing"] == ["region", "user_pool_id"]

    def test_secret_hash(self, client):
        assert client.secret_hash("jane") == expected_hash("jane")


class TestCreateCognitoClient:
    """Test cases for the client factory"""

    def test_builds_boto3_backed_client(self, settings):
        """Test the factory wires the boto3 adapter"""
        boto3_client = Mock()

        client = create_cognito_client(settings, boto3_client=boto3_client)

        assert isinstance(client.identity_provider, CognitoIdentityProviderAdapter)
        assert client.identity_provider.client is boto3_client
        assert client.identity_provider.client_id == CLIENT_ID
        assert client.identity_provider.user_pool_id == USER_POOL_ID

    def test_requires_pool_configuration(self):
        with pytest.raises(ConfigurationError):
            create_cognito_client(CognitoSettings(_env_file=None), boto3_client=Mock())
