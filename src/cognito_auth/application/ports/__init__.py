from .identity_provider import IdentityProvider
from .key_directory import KeyDirectory

__all__ = ["IdentityProvider", "KeyDirectory"]
