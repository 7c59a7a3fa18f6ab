"""API schemas."""

from src.devlog.schemas.account import (
    AccountRead,
    PublicProfileRead,
    UsernameAvailability,
)
from src.devlog.schemas.auth import SignInRequest, SignInResponse, SignUpRequest
from src.devlog.schemas.project import ArchiveRequest, ProjectCreate, ProjectPatch, ProjectRead

__all__ = [
    "AccountRead",
    "ArchiveRequest",
    "ProjectCreate",
    "ProjectPatch",
    "ProjectRead",
    "PublicProfileRead",
    "SignInRequest",
    "SignInResponse",
    "SignUpRequest",
    "UsernameAvailability",
]
