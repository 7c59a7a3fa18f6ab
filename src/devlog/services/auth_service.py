"""Authentication: sign-in, sign-out and bearer token resolution."""

from dataclasses import dataclass

from src.devlog.core.exceptions import UnauthenticatedError
from src.devlog.core.logging import get_logger
from src.devlog.identity import IdentityProvider
from src.devlog.models import Account
from src.devlog.repositories import AccountRepository
from src.devlog.store.base import DocumentStore

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SignInResult:
    access_token: str
    account: Account


class AuthService:
    def __init__(self, store: DocumentStore, identity_provider: IdentityProvider):
        self.accounts = AccountRepository(store)
        self.identity_provider = identity_provider

    async def sign_in(self, email: str, password: str) -> SignInResult:
        """Authenticate and open a session.

        Raises:
            InvalidCredentialsError: wrong email or password.
            UnauthenticatedError: the identity has no profile.
        """
        session = await self.identity_provider.sign_in(email, password)
        account = await self.accounts.get_by_id(session.identity.account_id)
        if account is None:
            # Half-registered identity, never hand out a usable session
            await self.identity_provider.sign_out(session.token)
            logger.warning("Sign-in without profile", account_id=session.identity.account_id)
            raise UnauthenticatedError("Account profile not found")
        logger.info("Account signed in", account_id=account.id)
        return SignInResult(access_token=session.token, account=account)

    async def sign_out(self, token: str) -> None:
        await self.identity_provider.sign_out(token)

    async def authenticate(self, token: str | None) -> Account:
        """Resolve a bearer token to its account.

        Raises:
            UnauthenticatedError: missing, invalid, expired or revoked token.
        """
        if not token:
            raise UnauthenticatedError()
        identity = await self.identity_provider.verify_token(token)
        if identity is None:
            raise UnauthenticatedError("Invalid or expired token")
        account = await self.accounts.get_by_id(identity.account_id)
        if account is None:
            raise UnauthenticatedError("Account not found")
        return account
