from .jwks_directory import HttpKeyDirectory, jwks_url

__all__ = ["HttpKeyDirectory", "jwks_url"]
