"""Model exports.

Import from here: `from src.devlog.models import Project, Account`
"""

from src.devlog.models.account import Account, UsernameEntry
from src.devlog.models.document import DocumentRecord
from src.devlog.models.enums import ProjectStatus
from src.devlog.models.project import Project, ProjectView, SlugClaim

__all__ = [
    "Account",
    "DocumentRecord",
    "Project",
    "ProjectStatus",
    "ProjectView",
    "SlugClaim",
    "UsernameEntry",
]
