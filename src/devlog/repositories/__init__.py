"""Repository layer - data access abstraction.

Re-exports all repositories.
"""

from src.devlog.repositories.account import AccountRepository, UsernameRepository
from src.devlog.repositories.base import BaseRepository
from src.devlog.repositories.project import ProjectRepository, SlugClaimRepository

__all__ = [
    "AccountRepository",
    "BaseRepository",
    "ProjectRepository",
    "SlugClaimRepository",
    "UsernameRepository",
]
