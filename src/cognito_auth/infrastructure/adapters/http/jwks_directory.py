import httpx
import structlog
from jwt import PyJWKSet
from jwt.exceptions import PyJWTError

from cognito_auth.application.ports.key_directory import KeyDirectory
from cognito_auth.domain.errors import KeyFetchError
from cognito_auth.telemetry import get_tracer

logger = structlog.get_logger(__name__)
tracer = get_tracer(__name__)


def jwks_url(region: str, user_pool_id: str) -> str:
    return f"https://cognito-idp.{region}.amazonaws.com/{user_pool_id}/.well-known/jwks.json"


class HttpKeyDirectory(KeyDirectory):
    """Fetches a user pool's JWKS from the Cognito well-known endpoint"""

    def __init__(self, timeout: float = 5.0, transport: httpx.BaseTransport | None = None):
        self.timeout = timeout
        self._transport = transport

    def fetch_key_set(self, region: str, user_pool_id: str) -> PyJWKSet:
        url = jwks_url(region, user_pool_id)

        with tracer.start_as_current_span("cognito.jwks.fetch") as span:
            span.set_attribute("http.url", url)

            try:
                with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                    response = client.get(url)
            except httpx.HTTPError as e:
                logger.error("JWKS fetch failed", url=url, error=str(e))
                raise KeyFetchError(f"Failed to fetch JWKS: {e}", details={"url": url}) from e

            span.set_attribute("http.status_code", response.status_code)
            if response.status_code != 200:
                logger.error("JWKS fetch returned unexpected status", url=url, status_code=response.status_code)
                raise KeyFetchError(
                    f"Failed to fetch JWKS: HTTP {response.status_code}",
                    details={"url": url, "status_code": response.status_code},
                )

            try:
                data = response.json()
            except ValueError as e:
                raise KeyFetchError("JWKS response is not valid JSON", details={"url": url}) from e

            if not isinstance(data, dict):
                raise KeyFetchError("JWKS response is not a JSON object", details={"url": url})

            try:
                key_set = PyJWKSet.from_dict(data)
            except PyJWTError as e:
                raise KeyFetchError(f"Malformed JWKS: {e}", details={"url": url}) from e

        logger.info("JWKS fetched", url=url, key_count=len(key_set.keys))
        return key_set
