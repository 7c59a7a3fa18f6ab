"""Identity provider contract.

The provider owns credentials and sessions. Everything else (profiles,
usernames, projects) lives in the document store and references the
provider's account id.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Identity:
    account_id: str
    email: str


@dataclass(frozen=True, slots=True)
class IdentitySession:
    """A signed-in identity and the bearer token that proves it."""

    token: str
    identity: Identity


class IdentityProvider(ABC):
    @abstractmethod
    async def create_account(self, email: str, password: str) -> Identity:
        """Register credentials and return the new identity.

        Raises:
            EmailAlreadyRegisteredError: the email already has an account.
            IdentityProviderError: the provider failed.
        """

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> IdentitySession:
        """Start a session.

        Raises:
            InvalidCredentialsError: unknown email or wrong password.
            IdentityProviderError: the provider failed.
        """

    @abstractmethod
    async def sign_out(self, token: str) -> None:
        """End the session behind ``token``. Unknown tokens are ignored."""

    @abstractmethod
    async def verify_token(self, token: str) -> Identity | None:
        """Return the identity of a live session, or None."""

    @abstractmethod
    async def delete_account(self, account_id: str) -> None:
        """Remove the credentials and sessions of an account."""
