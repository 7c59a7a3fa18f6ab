"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    ACTIVE = "active"
    UPCOMING = "upcoming"
    COMPLETED = "completed"
    ARCHIVED = "archived"
