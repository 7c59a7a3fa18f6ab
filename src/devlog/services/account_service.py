"""Account directory: sign-up, username index and profile lookups."""

from src.devlog.core.exceptions import (
    DevLogError,
    InvalidUsernameError,
    NotFoundError,
    UsernameTakenError,
)
from src.devlog.core.logging import get_logger
from src.devlog.core.security import normalize_username, validate_username_format
from src.devlog.identity import Identity, IdentityProvider
from src.devlog.models import Account
from src.devlog.repositories import AccountRepository, UsernameRepository
from src.devlog.store.base import SERVER_TIMESTAMP, DocumentStore

logger = get_logger(__name__)


class AccountService:
    """Service for account profiles and usernames."""

    def __init__(self, store: DocumentStore, identity_provider: IdentityProvider):
        self.accounts = AccountRepository(store)
        self.usernames = UsernameRepository(store)
        self.identity_provider = identity_provider

    async def is_username_taken(self, username: str) -> bool:
        return await self.usernames.exists(normalize_username(username))

    async def sign_up(
        self,
        email: str,
        password: str,
        username: str,
        display_name: str | None = None,
    ) -> Account:
        """Register an identity and its profile under a unique username.

        The username is reserved with a create-if-absent write, so two
        concurrent sign-ups cannot both get it. If any step after creating
        the identity fails, the identity and the reservation are undone.

        Raises:
            InvalidUsernameError: the username is malformed or reserved.
            UsernameTakenError: the username is already in use.
            EmailAlreadyRegisteredError: the email already has an identity.
            IdentityProviderError: the identity provider failed.
            StoreFailureError: the document store failed.
        """
        try:
            username = validate_username_format(normalize_username(username))
        except ValueError as e:
            raise InvalidUsernameError(str(e)) from e
        if await self.is_username_taken(username):
            raise UsernameTakenError()

        identity = await self.identity_provider.create_account(email, password)
        claimed = False
        try:
            await self.usernames.claim(username, identity.account_id)
            claimed = True
            account = await self.accounts.create(
                identity.account_id,
                {
                    "email": identity.email,
                    "username": username,
                    "displayName": (display_name or "").strip(),
                    "createdAt": SERVER_TIMESTAMP,
                },
            )
        except Exception:
            await self._rollback_sign_up(identity, username if claimed else None)
            raise

        logger.info("Account signed up", account_id=account.id, username=username)
        return account

    async def _rollback_sign_up(self, identity: Identity, username: str | None) -> None:
        logger.warning("Rolling back sign-up", account_id=identity.account_id)
        try:
            if username is not None:
                await self.usernames.delete(username)
            await self.identity_provider.delete_account(identity.account_id)
        except DevLogError as e:
            logger.error(
                "Sign-up rollback failed",
                account_id=identity.account_id,
                error=e.detail,
            )

    async def resolve_username(self, username: str) -> str:
        """Map a username to its account id.

        Raises:
            NotFoundError: the username is not registered.
        """
        entry = await self.usernames.get_by_id(normalize_username(username))
        if entry is None:
            raise NotFoundError(f"User '{username}' not found")
        return entry.account_id

    async def get_account(self, account_id: str) -> Account:
        account = await self.accounts.get_by_id(account_id)
        if account is None:
            raise NotFoundError(f"Account {account_id} not found")
        return account

    async def get_by_username(self, username: str) -> Account:
        return await self.get_account(await self.resolve_username(username))
