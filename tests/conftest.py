import json
import time

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt import PyJWKSet

REGION = "eu-west-1"
USER_POOL_ID = "eu-west-1_TestPool1"
CLIENT_ID = "test-client-id"
CLIENT_SECRET = "test-client-secret"
ISSUER = f"https://cognito-idp.{REGION}.amazonaws.com/{USER_POOL_ID}"


def public_jwk(private_key, kid: str) -> dict:
    """Public JWK dict for an RSA private key"""
    jwk = json.loads(jwt.algorithms.RSAAlgorithm.to_jwk(private_key.public_key()))
    jwk.update({"kid": kid, "alg": "RS256", "use": "sig"})
    return jwk


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host AWS / Cognito settings out of the tests"""
    for name in (
        "AWS_REGION",
        "COGNITO_REGION",
        "COGNITO_USER_POOL_ID",
        "COGNITO_CLIENT_ID",
        "COGNITO_CLIENT_SECRET",
        "COGNITO_ENDPOINT_URL",
        "OTEL_EXPORTER_OTLP_ENDPOINT",
        "COGNITO_OTEL_EXPORTER_OTLP_ENDPOINT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def signing_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def jwks_dict(signing_key):
    return {"keys": [public_jwk(signing_key, "test-kid")]}


@pytest.fixture
def key_set(jwks_dict):
    return PyJWKSet.from_dict(jwks_dict)


@pytest.fixture
def make_token(signing_key):
    """Build an RS256 access token; keyword overrides replace default claims"""

    def _make(key=None, kid="test-kid", **overrides):
        now = int(time.time())
        claims = {
            "sub": "9f0c1a2b-user-sub",
            "iss": ISSUER,
            "client_id": CLIENT_ID,
            "token_use": "access",
            "scope": "aws.cognito.signin.user.admin",
            "auth_time": now,
            "iat": now,
            "exp": now + 3600,
            "username": "jane.doe",
        }
        claims.update(overrides)
        claims = {k: v for k, v in claims.items() if v is not None}
        return jwt.encode(claims, key or signing_key, algorithm="RS256", headers={"kid": kid})

    return _make
