"""Identity providers and the client-side identity observer."""

from src.devlog.identity.base import Identity, IdentityProvider, IdentitySession
from src.devlog.identity.client import IdentityClient
from src.devlog.identity.password import PasswordIdentityProvider

__all__ = [
    "Identity",
    "IdentityClient",
    "IdentityProvider",
    "IdentitySession",
    "PasswordIdentityProvider",
]
