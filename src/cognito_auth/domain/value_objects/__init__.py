from .claims import AccessTokenClaims

__all__ = ["AccessTokenClaims"]
