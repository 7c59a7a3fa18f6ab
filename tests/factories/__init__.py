"""Test data factories using polyfactory."""

from tests.factories.project import ProjectCreateFactory

# Scores 4 with zxcvbn, so sign-up accepts it
DEFAULT_TEST_PASSWORD = "correct-horse-battery-staple"

__all__ = [
    "DEFAULT_TEST_PASSWORD",
    "ProjectCreateFactory",
]
