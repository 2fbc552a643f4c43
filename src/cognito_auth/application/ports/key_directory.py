from abc import ABC, abstractmethod

from jwt import PyJWKSet


class KeyDirectory(ABC):
    """Port for the public key directory of a user pool"""

    @abstractmethod
    def fetch_key_set(self, region: str, user_pool_id: str) -> PyJWKSet:
        """
        Fetch the pool's JSON Web Key Set

        Raises:
            KeyFetchError: If the key set cannot be fetched or parsed
        """
        pass
