from .cognito_client import CognitoIdentityProviderAdapter

__all__ = ["CognitoIdentityProviderAdapter"]
