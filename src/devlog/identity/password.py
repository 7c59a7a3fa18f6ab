"""Email/password identity provider persisted in the document store.

Credentials are keyed by a SHA256 hash of the normalized email so registration
is a single create-if-absent write and any valid address fits a document id.
Tokens are JWTs that reference a session document; signing out deletes the
session and invalidates the token.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from src.devlog.core.exceptions import (
    ConflictError,
    EmailAlreadyRegisteredError,
    IdentityProviderError,
    InvalidCredentialsError,
    StoreFailureError,
)
from src.devlog.core.logging import get_logger
from src.devlog.core.security import (
    DUMMY_PASSWORD_HASH,
    TOKEN_TYPE_ACCESS,
    create_access_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.devlog.identity.base import Identity, IdentityProvider, IdentitySession
from src.devlog.store.base import SERVER_TIMESTAMP, DocumentStore, where

logger = get_logger(__name__)

CREDENTIALS_COLLECTION = "credentials"
SESSIONS_COLLECTION = "sessions"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def credential_key(email: str) -> str:
    """Document id of the credentials for ``email``."""
    return hash_token(normalize_email(email))


@contextmanager
def _provider_errors() -> Iterator[None]:
    """Report store failures as provider failures."""
    try:
        yield
    except StoreFailureError as e:
        raise IdentityProviderError(f"Identity provider unavailable: {e.detail}") from e


class PasswordIdentityProvider(IdentityProvider):
    def __init__(self, store: DocumentStore):
        self.store = store

    async def create_account(self, email: str, password: str) -> Identity:
        email = normalize_email(email)
        account_id = self.store.new_id()
        with _provider_errors():
            try:
                await self.store.create(
                    CREDENTIALS_COLLECTION,
                    credential_key(email),
                    {
                        "accountId": account_id,
                        "email": email,
                        "passwordHash": hash_password(password),
                        "createdAt": SERVER_TIMESTAMP,
                    },
                )
            except ConflictError as e:
                raise EmailAlreadyRegisteredError() from e
        logger.info("Identity created", account_id=account_id)
        return Identity(account_id=account_id, email=email)

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        email = normalize_email(email)
        with _provider_errors():
            credential = await self.store.get(CREDENTIALS_COLLECTION, credential_key(email))
            # Always verify a hash so unknown emails are not cheaper to probe
            password_hash = (
                credential.data["passwordHash"] if credential is not None else DUMMY_PASSWORD_HASH
            )
            if not verify_password(password, password_hash) or credential is None:
                raise InvalidCredentialsError()

            identity = Identity(account_id=credential.data["accountId"], email=email)
            session = await self.store.add(
                SESSIONS_COLLECTION,
                {
                    "accountId": identity.account_id,
                    "email": identity.email,
                    "createdAt": SERVER_TIMESTAMP,
                },
            )
        token = create_access_token(identity.account_id, session.id)
        return IdentitySession(token=token, identity=identity)

    async def sign_out(self, token: str) -> None:
        payload = decode_token(token)
        if payload is None or not payload.get("sid"):
            return
        with _provider_errors():
            await self.store.delete(SESSIONS_COLLECTION, payload["sid"])

    async def verify_token(self, token: str) -> Identity | None:
        payload = decode_token(token)
        if payload is None or payload.get("type") != TOKEN_TYPE_ACCESS:
            return None
        account_id, session_id = payload.get("sub"), payload.get("sid")
        if not account_id or not session_id:
            return None
        with _provider_errors():
            session = await self.store.get(SESSIONS_COLLECTION, session_id)
        if session is None or session.data.get("accountId") != account_id:
            return None
        return Identity(account_id=account_id, email=session.data.get("email", ""))

    async def delete_account(self, account_id: str) -> None:
        with _provider_errors():
            for collection in (CREDENTIALS_COLLECTION, SESSIONS_COLLECTION):
                documents = await self.store.query(
                    collection, [where("accountId", "==", account_id)]
                )
                for document in documents:
                    await self.store.delete(collection, document.id)
        logger.info("Identity deleted", account_id=account_id)
