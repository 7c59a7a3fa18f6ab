"""Tests for sign-up and the username directory."""

import pytest

from src.devlog.core.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidUsernameError,
    NotFoundError,
    StoreFailureError,
    UsernameTakenError,
)
from src.devlog.identity.password import credential_key
from src.devlog.models import Account
from src.devlog.repositories import AccountRepository
from src.devlog.services import AccountService
from src.devlog.store import DocumentStore
from tests.factories import DEFAULT_TEST_PASSWORD

pytestmark = pytest.mark.unit


class TestSignUp:
    async def test_creates_profile_and_username(
        self, store: DocumentStore, account_service: AccountService
    ) -> None:
        account = await account_service.sign_up(
            "Ada@Example.com", DEFAULT_TEST_PASSWORD, "  Ada ", display_name=" Ada L. "
        )

        assert account.username == "ada"
        assert account.email == "ada@example.com"
        assert account.display_name == "Ada L."
        assert account.created_at is not None
        assert await account_service.resolve_username("ada") == account.id
        username_doc = await store.get("usernames", "ada")
        assert username_doc is not None
        assert username_doc.data == {"accountId": account.id}

    async def test_username_taken(self, account_service: AccountService, alice: Account) -> None:
        with pytest.raises(UsernameTakenError):
            await account_service.sign_up("other@example.com", DEFAULT_TEST_PASSWORD, "ALICE")

    async def test_username_taken_creates_no_identity(
        self, account_service: AccountService, alice: Account
    ) -> None:
        with pytest.raises(UsernameTakenError):
            await account_service.sign_up("new@example.com", DEFAULT_TEST_PASSWORD, "alice")

        # The email is still free
        account = await account_service.sign_up("new@example.com", DEFAULT_TEST_PASSWORD, "newbie")
        assert account.email == "new@example.com"

    async def test_email_already_registered(
        self, account_service: AccountService, alice: Account
    ) -> None:
        with pytest.raises(EmailAlreadyRegisteredError):
            await account_service.sign_up("alice@example.com", DEFAULT_TEST_PASSWORD, "alice2")

        assert not await account_service.is_username_taken("alice2")

    @pytest.mark.parametrize("username", ["no/slash", "ab", "signup"])
    async def test_invalid_username_rejected(
        self, account_service: AccountService, username: str
    ) -> None:
        with pytest.raises(InvalidUsernameError) as exc_info:
            await account_service.sign_up("x@example.com", DEFAULT_TEST_PASSWORD, username)

        assert exc_info.value.status_code == 422
        assert not await account_service.is_username_taken(username)

    async def test_profile_failure_rolls_back(
        self,
        store: DocumentStore,
        account_service: AccountService,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        async def failing_create(self, id, data):
            raise StoreFailureError()

        monkeypatch.setattr(AccountRepository, "create", failing_create)

        with pytest.raises(StoreFailureError):
            await account_service.sign_up("ada@example.com", DEFAULT_TEST_PASSWORD, "ada")

        monkeypatch.undo()
        assert not await account_service.is_username_taken("ada")
        assert await store.get("credentials", credential_key("ada@example.com")) is None
        # Nothing left behind, so the same sign-up now succeeds
        account = await account_service.sign_up("ada@example.com", DEFAULT_TEST_PASSWORD, "ada")
        assert account.username == "ada"


class TestDirectory:
    async def test_is_username_taken_normalizes(
        self, account_service: AccountService, alice: Account
    ) -> None:
        assert await account_service.is_username_taken(" ALICE ")
        assert not await account_service.is_username_taken("alicia")

    async def test_resolve_unknown_username(self, account_service: AccountService) -> None:
        with pytest.raises(NotFoundError):
            await account_service.resolve_username("ghost")

    async def test_get_by_username(self, account_service: AccountService, alice: Account) -> None:
        account = await account_service.get_by_username("alice")

        assert account.id == alice.id
        assert account.display_name == "Alice"

    async def test_get_unknown_account(self, account_service: AccountService) -> None:
        with pytest.raises(NotFoundError):
            await account_service.get_account("missing")
