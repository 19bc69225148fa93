"""
Student session tracking model for the error-pattern analytics system.

One record stores a single student's performance within one session:
which error patterns the student exhibited and whether the correction
for each pattern worked for that student.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, field_validator


class StudentSessionTracking(BaseModel):
    """Per-student, per-session error tracking."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    session_id: Optional[int] = None
    student_id: int
    otr_count: int = 0
    errors_exhibited: List[str] = []
    correction_effectiveness: Dict[str, bool] = {}
    notes: Optional[str] = None

    @field_validator("errors_exhibited", "correction_effectiveness", mode="before")
    def validate_optional_collections(cls, v, info):
        """Null collections are stored for students with nothing logged."""
        if v is None:
            return {} if info.field_name == "correction_effectiveness" else []
        return v

    def get_correction_outcomes(self) -> List[bool]:
        """
        Get the outcome of every correction recorded for this student.

        Returns:
            List[bool]: One entry per corrected pattern, True if it worked
        """
        return list(self.correction_effectiveness.values())
