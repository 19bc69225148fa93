"""
Group and student models for the error-pattern analytics system.

This module defines the data models for intervention groups and the
students assigned to them.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict

from .enums import Curriculum


class Group(BaseModel):
    """Intervention group."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    curriculum: Optional[Curriculum] = None
    tier: Optional[int] = None
    grade: Optional[int] = None


class Student(BaseModel):
    """Student enrolled in an intervention group."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    group_id: int
    notes: Optional[str] = None


def fallback_group_name(group_id: int) -> str:
    """
    Display name for a group id that has no Group record.

    Args:
        group_id: Group identifier

    Returns:
        str: Placeholder name such as "Group 7"
    """
    return f"Group {group_id}"
