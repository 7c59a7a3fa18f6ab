"""Repositories for account profiles and the username index."""

from src.devlog.core.exceptions import ConflictError, UsernameTakenError
from src.devlog.models import Account, UsernameEntry
from src.devlog.repositories.base import BaseRepository
from src.devlog.store.base import DocumentStore

ACCOUNTS_COLLECTION = "accounts"
USERNAMES_COLLECTION = "usernames"


class AccountRepository(BaseRepository[Account]):
    """Account profiles, keyed by account id."""

    model = Account

    def __init__(self, store: DocumentStore):
        super().__init__(store, ACCOUNTS_COLLECTION)


class UsernameRepository(BaseRepository[UsernameEntry]):
    """Username index, keyed by username."""

    model = UsernameEntry

    def __init__(self, store: DocumentStore):
        super().__init__(store, USERNAMES_COLLECTION)

    async def claim(self, username: str, account_id: str) -> UsernameEntry:
        """Atomically map a free username to an account.

        Raises:
            UsernameTakenError: the username is already mapped.
        """
        try:
            return await self.create(username, {"accountId": account_id})
        except ConflictError as e:
            raise UsernameTakenError() from e
