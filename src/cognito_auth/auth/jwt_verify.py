# Assumptions:
# - Cognito access tokens are RS256 signed compact JWS
# - Signature is checked against every RSA key in the pool's JWKS
# - No clock skew is allowed; a token is still valid in its exp second

import json
import time
from collections.abc import Callable
from typing import Any

import jwt
import structlog
from jwt import PyJWKSet

from cognito_auth.auth.jwks import KeyDirectoryCache
from cognito_auth.domain.errors import TokenExpiryError, TokenVerificationError
from cognito_auth.domain.value_objects.claims import AccessTokenClaims

logger = structlog.get_logger(__name__)

ALGORITHMS = ["RS256"]
ACCESS_TOKEN_USE = "access"


def expected_issuer(region: str, user_pool_id: str) -> str:
    return f"https://cognito-idp.{region}.amazonaws.com/{user_pool_id}"


class AccessTokenVerifier:
    def __init__(self, key_cache: KeyDirectoryCache, clock: Callable[[], float] = time.time):
        self.key_cache = key_cache
        self.clock = clock
        self._jws = jwt.PyJWS(algorithms=ALGORITHMS)

    def verify(self, access_token: str, region: str, user_pool_id: str) -> str:
        """
        Verify a Cognito access token and return its username

        Checks run in a fixed order and stop at the first failure:
        structure, signature, iss, token_use, exp.

        Raises:
            TokenVerificationError: Malformed, unverifiable, or wrong iss/token_use
            TokenExpiryError: Valid token whose exp has passed
            KeyFetchError: If the pool's JWKS cannot be fetched
        """
        return self.verify_claims(access_token, region, user_pool_id).username

    def verify_claims(self, access_token: str, region: str, user_pool_id: str) -> AccessTokenClaims:
        self._parse(access_token)

        key_set = self.key_cache.get_key_set(region, user_pool_id)
        payload = self._verify_signature(access_token, key_set)

        claims = self._decode_payload(payload)

        if claims.get("iss") != expected_issuer(region, user_pool_id):
            raise TokenVerificationError("invalid iss")

        if claims.get("token_use") != ACCESS_TOKEN_USE:
            raise TokenVerificationError("invalid token_use")

        exp = claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise TokenVerificationError("invalid exp")
        if exp < int(self.clock()):
            raise TokenExpiryError("invalid exp", details={"exp": exp})

        username = claims.get("username")
        if not isinstance(username, str) or not username:
            raise TokenVerificationError("invalid username")

        extra = {k: v for k, v in claims.items() if k not in ("iss", "token_use", "exp", "username")}
        return AccessTokenClaims(
            iss=claims["iss"],
            token_use=claims["token_use"],
            exp=int(exp),
            username=username,
            extra=extra,
        )

    def _parse(self, access_token: str) -> None:
        if not isinstance(access_token, str) or not access_token:
            raise TokenVerificationError("malformed token")
        try:
            self._jws.decode_complete(access_token, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            raise TokenVerificationError("malformed token") from e

    def _verify_signature(self, access_token: str, key_set: PyJWKSet) -> bytes:
        for jwk in key_set.keys:
            if jwk.key_type != "RSA":
                continue
            try:
                decoded = self._jws.decode_complete(access_token, key=jwk.key, algorithms=ALGORITHMS)
            except jwt.InvalidTokenError:
                continue
            return decoded["payload"]

        logger.debug("Token signature did not match any JWKS key", key_count=len(key_set.keys))
        raise TokenVerificationError("could not verify token")

    @staticmethod
    def _decode_payload(payload: bytes) -> dict[str, Any]:
        try:
            claims = json.loads(payload)
        except ValueError as e:
            raise TokenVerificationError("malformed token") from e
        if not isinstance(claims, dict):
            raise TokenVerificationError("malformed token")
        return claims


def create_access_token_verifier(key_cache: KeyDirectoryCache) -> AccessTokenVerifier:
    return AccessTokenVerifier(key_cache)
