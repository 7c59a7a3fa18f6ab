"""Account profile and username index documents."""

from datetime import datetime

from src.devlog.models.base import DocumentModel


class Account(DocumentModel):
    """Application profile of an identity, stored at ``accounts/{id}``."""

    id: str
    email: str
    username: str
    display_name: str = ""
    created_at: datetime | None = None

    @property
    def display_name_or_email(self) -> str:
        return self.display_name or self.email or self.id


class UsernameEntry(DocumentModel):
    """Username index entry, stored at ``usernames/{username}``."""

    id: str  # the username itself
    account_id: str
