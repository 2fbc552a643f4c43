"""Configuration management utilities."""

from .settings import CognitoSettings, get_settings

__all__ = [
    "CognitoSettings",
    "get_settings",
]
