import base64
import hashlib
import hmac

from cognito_auth.domain.errors import ConfigurationError


def compute_secret_hash(username: str, client_id: str | None, client_secret: str | None) -> str:
    """
    Calculate the Cognito SECRET_HASH for a username

    HMAC-SHA256 over ``username + client_id`` keyed with the app client
    secret, base64 encoded.

    Raises:
        ConfigurationError: If the app client id or secret is not configured
    """
    if not client_id:
        raise ConfigurationError("App client id is not configured", details={"setting": "client_id"})
    if not client_secret:
        raise ConfigurationError("App client secret is not configured", details={"setting": "client_secret"})

    message = username + client_id
    dig = hmac.new(
        client_secret.encode("utf-8"),
        msg=message.encode("utf-8"),
        digestmod=hashlib.sha256,
    ).digest()

    return base64.b64encode(dig).decode()
