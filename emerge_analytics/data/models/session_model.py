"""
Session model for the error-pattern analytics system.

This module defines the data models for intervention sessions and the
errors observed while they were taught.
"""

import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from .enums import SessionStatus


class ObservedError(BaseModel):
    """An error logged during a session."""

    model_config = ConfigDict(frozen=True)

    error_pattern: str
    correction_used: Optional[str] = None
    correction_worked: Optional[bool] = None
    add_to_bank: Optional[bool] = None


class Session(BaseModel):
    """
    Intervention session for a group.

    Only completed sessions participate in error-pattern analysis. Planning
    and lesson fields stored alongside a session are ignored here.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    group_id: int
    date: datetime.date
    status: SessionStatus = SessionStatus.PLANNED
    errors_observed: List[ObservedError] = []
    unexpected_errors: List[ObservedError] = []

    @field_validator("date", mode="before")
    def validate_date(cls, v):
        """Accept full ISO timestamps ("2024-01-05T10:30:00Z") as well as plain dates."""
        if isinstance(v, datetime.datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return datetime.datetime.fromisoformat(v.strip().replace("Z", "+00:00")).date()
        return v

    @field_validator("errors_observed", "unexpected_errors", mode="before")
    def validate_error_lists(cls, v):
        """Stored sessions use null for "no errors logged"."""
        if not v:
            return []
        return v

    def is_completed(self) -> bool:
        """
        Check whether the session was actually taught.

        Returns:
            bool: True if the session status is completed
        """
        return self.status == SessionStatus.COMPLETED

    def get_all_errors(self) -> List[ObservedError]:
        """
        Get anticipated and unexpected errors as one list.

        Returns:
            List[ObservedError]: errors_observed followed by unexpected_errors
        """
        return list(self.errors_observed) + list(self.unexpected_errors)

    def get_error_patterns(self) -> List[str]:
        """
        Get the pattern name of every logged error, repeats included.

        Returns:
            List[str]: Pattern names in logging order
        """
        return [error.error_pattern for error in self.get_all_errors()]

    def has_pattern(self, pattern: str) -> bool:
        """
        Check if a pattern was logged at least once in this session.

        Args:
            pattern: Error pattern name

        Returns:
            bool: True if the pattern appears in either error list
        """
        return any(error.error_pattern == pattern for error in self.get_all_errors())
