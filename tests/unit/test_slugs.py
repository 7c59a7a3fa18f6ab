"""Tests for slugify and per-owner unique slug assignment."""

import re

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.devlog.core.exceptions import ConflictError
from src.devlog.repositories import ProjectRepository, SlugClaimRepository
from src.devlog.services.slug_service import (
    assign_unique_slug,
    claim_unique_slug,
    next_candidate,
    slugify,
)
from src.devlog.store import DocumentStore

pytestmark = pytest.mark.unit

SLUG_PATTERN = re.compile(r"^[a-z0-9_]+(-[a-z0-9_]+)*$")


class TestSlugify:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("My Cool Project!!", "my-cool-project"),
            ("  Hello   World  ", "hello-world"),
            ("already-a-slug", "already-a-slug"),
            ("snake_case_name", "snake-case-name"),
            ("--Leading and trailing--", "leading-and-trailing"),
            ("Version 2.0 (beta)", "version-20-beta"),
            ("Café Déjà Vu", "caf-dj-vu"),
            ("!!!", ""),
            ("", ""),
        ],
    )
    def test_examples(self, name: str, expected: str) -> None:
        assert slugify(name) == expected

    @given(name=st.text(max_size=80))
    @settings(max_examples=200)
    def test_output_is_url_safe(self, name: str) -> None:
        slug = slugify(name)
        assert slug == "" or SLUG_PATTERN.match(slug.replace("_", "-"))

    @given(name=st.text(max_size=80))
    @settings(max_examples=200)
    def test_idempotent(self, name: str) -> None:
        slug = slugify(name)
        assert slugify(slug) == slug


async def _seed(store: DocumentStore, owner: str, *slugs: str) -> ProjectRepository:
    projects = ProjectRepository(store, owner)
    for i, slug in enumerate(slugs):
        await projects.insert(f"p{i}", {"name": slug, "slug": slug})
    return projects


class TestAssignUniqueSlug:
    async def test_free_base_is_used(self, store: DocumentStore) -> None:
        projects = await _seed(store, "owner")

        assert await assign_unique_slug(projects, "My Cool Project!!") == "my-cool-project"

    async def test_taken_base_gets_first_suffix(self, store: DocumentStore) -> None:
        projects = await _seed(store, "owner", "my-cool-project")

        assert await assign_unique_slug(projects, "My Cool Project") == "my-cool-project-1"

    async def test_suffix_is_max_plus_one(self, store: DocumentStore) -> None:
        projects = await _seed(store, "owner", "demo", "demo-1", "demo-7", "demo-3")

        assert await assign_unique_slug(projects, "Demo") == "demo-8"

    async def test_gaps_are_not_filled(self, store: DocumentStore) -> None:
        projects = await _seed(store, "owner", "demo", "demo-2")

        assert await assign_unique_slug(projects, "demo") == "demo-3"

    async def test_non_numeric_neighbours_ignored(self, store: DocumentStore) -> None:
        projects = await _seed(store, "owner", "demo", "demo-app", "demo-2-final")

        assert await assign_unique_slug(projects, "demo") == "demo-1"

    async def test_uniqueness_is_per_owner(self, store: DocumentStore) -> None:
        await _seed(store, "someone-else", "demo")
        projects = await _seed(store, "owner")

        assert await assign_unique_slug(projects, "demo") == "demo"

    async def test_empty_slug_falls_back(self, store: DocumentStore) -> None:
        projects = await _seed(store, "owner", "project")

        assert await assign_unique_slug(projects, "???") == "project-1"


class TestClaimUniqueSlug:
    async def test_claim_is_recorded(self, store: DocumentStore) -> None:
        projects = ProjectRepository(store, "owner")
        claims = SlugClaimRepository(store, "owner")

        slug = await claim_unique_slug(projects, claims, "Demo", "p1", max_attempts=3)

        claim = await claims.get_by_id(slug)
        assert slug == "demo"
        assert claim is not None
        assert claim.project_id == "p1"

    async def test_collision_moves_to_next_suffix(self, store: DocumentStore) -> None:
        projects = ProjectRepository(store, "owner")
        claims = SlugClaimRepository(store, "owner")
        # Another writer reserved the slug but has not written its project yet
        await claims.claim("demo", "in-flight")

        slug = await claim_unique_slug(projects, claims, "Demo", "p1", max_attempts=3)

        assert slug == "demo-1"

    async def test_gives_up_after_max_attempts(self, store: DocumentStore) -> None:
        projects = ProjectRepository(store, "owner")
        claims = SlugClaimRepository(store, "owner")
        for slug in ("demo", "demo-1", "demo-2"):
            await claims.claim(slug, "in-flight")

        with pytest.raises(ConflictError):
            await claim_unique_slug(projects, claims, "Demo", "p1", max_attempts=3)

    async def test_release_only_by_holder(self, store: DocumentStore) -> None:
        claims = SlugClaimRepository(store, "owner")
        await claims.claim("demo", "p1")

        assert await claims.release("demo", "p2") is False
        assert await claims.release("demo", "p1") is True
        assert await claims.get_by_id("demo") is None


@pytest.mark.parametrize(
    ("slug", "base", "expected"),
    [("demo", "demo", "demo-1"), ("demo-4", "demo", "demo-5"), ("demo-x", "demo", "demo-1")],
)
def test_next_candidate(slug: str, base: str, expected: str) -> None:
    assert next_candidate(slug, base) == expected
