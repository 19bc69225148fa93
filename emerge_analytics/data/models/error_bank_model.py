"""
Error bank model for the error-pattern analytics system.

This module defines the data model for error bank entries: named, recurring
student mistake types together with the correction protocol used for them
and cumulative occurrence/effectiveness counters.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import Curriculum
from emerge_analytics.utils.safe_ops import safe_divide


class ErrorBankEntry(BaseModel):
    """
    A single error bank entry.

    occurrence_count is the cumulative number of times the pattern was logged;
    effectiveness_count is how many of those logged corrections worked.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[int] = None
    curriculum: Curriculum
    error_pattern: str
    underlying_gap: Optional[str] = None
    correction_protocol: str = ""
    correction_prompts: Optional[List[str]] = None
    visual_cues: Optional[str] = None
    kinesthetic_cues: Optional[str] = None
    is_custom: bool = False
    occurrence_count: int = Field(default=0, ge=0)
    effectiveness_count: int = Field(default=0, ge=0)
    created_at: Optional[str] = None

    @field_validator("correction_protocol", mode="before")
    def validate_correction_protocol(cls, v):
        """Treat a null protocol as empty text."""
        return v or ""

    @model_validator(mode="after")
    def validate_counts(self):
        """Reject entries recording more effective corrections than occurrences."""
        if self.effectiveness_count > self.occurrence_count:
            raise ValueError(
                f"effectiveness_count ({self.effectiveness_count}) exceeds "
                f"occurrence_count ({self.occurrence_count})"
            )
        return self

    def get_effectiveness_ratio(self) -> float:
        """
        Get the fraction of occurrences whose correction worked.

        Returns:
            float: Ratio in [0, 1], 0 when the pattern never occurred
        """
        return safe_divide(self.effectiveness_count, self.occurrence_count)
