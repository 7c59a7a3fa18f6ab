"""Slug assignment - URL-safe, per-owner unique project identifiers."""

import re
from typing import Final

from src.devlog.core.exceptions import ConflictError
from src.devlog.core.logging import get_logger
from src.devlog.repositories import ProjectRepository, SlugClaimRepository

logger = get_logger(__name__)

# Used when a name has no slug-able characters at all, e.g. "!!!"
EMPTY_SLUG_FALLBACK: Final[str] = "project"

_STRIP_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATOR_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\s_-]+", re.ASCII)


def slugify(name: str) -> str:
    """Map a name to a URL-safe token.

    Lowercases and trims, drops everything but ASCII letters, digits,
    underscores, whitespace and hyphens, collapses separator runs into a
    single hyphen and strips hyphens from both ends. Never fails; an empty
    or all-symbol name gives an empty string.
    """
    slug = _STRIP_PATTERN.sub("", name.lower().strip())
    slug = _SEPARATOR_PATTERN.sub("-", slug)
    return slug.strip("-")


def _suffix_pattern(base: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(base)}-(\d+)$")


def _base_slug(name: str) -> str:
    return slugify(name) or EMPTY_SLUG_FALLBACK


async def assign_unique_slug(projects: ProjectRepository, name: str) -> str:
    """Return a slug for ``name`` that no project of this owner uses yet.

    ``base`` is returned when free. Otherwise the owner's slugs in the range
    ``base-`` .. ``base-\\uffff`` are scanned and ``base-<max + 1>`` is
    returned, where ``max`` is the highest numeric suffix found (0 if none).
    """
    base = _base_slug(name)
    if not await projects.slug_exists(base):
        return base

    pattern = _suffix_pattern(base)
    highest = 0
    for slug in await projects.slugs_with_prefix(f"{base}-"):
        match = pattern.match(slug)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"{base}-{highest + 1}"


def next_candidate(slug: str, base: str) -> str:
    """The slug after ``slug`` in the ``base``, ``base-1``, ``base-2`` sequence."""
    match = _suffix_pattern(base).match(slug)
    number = int(match.group(1)) if match else 0
    return f"{base}-{number + 1}"


async def claim_unique_slug(
    projects: ProjectRepository,
    claims: SlugClaimRepository,
    name: str,
    project_id: str,
    max_attempts: int,
) -> str:
    """Assign a unique slug and reserve it with a create-if-absent write.

    Two writers that computed the same slug cannot both win the claim; the
    loser moves on to the next suffix.

    Raises:
        ConflictError: every attempt collided with an existing claim.
    """
    base = _base_slug(name)
    slug = await assign_unique_slug(projects, name)
    for attempt in range(1, max_attempts + 1):
        try:
            await claims.claim(slug, project_id)
            return slug
        except ConflictError:
            logger.info(
                "Slug claim collided",
                slug=slug,
                project_id=project_id,
                attempt=attempt,
            )
            slug = next_candidate(slug, base)
    raise ConflictError(f"Could not reserve a unique slug for '{name}'")
