"""
Snapshot model for the error-pattern analytics system.

A snapshot is the full set of read-only collections one analysis call
works on. It is loaded once per call and never written back.
"""

from typing import List
from pydantic import BaseModel, ConfigDict

from .error_bank_model import ErrorBankEntry
from .session_model import Session
from .group_model import Group, Student
from .tracking_model import StudentSessionTracking


class AnalysisSnapshot(BaseModel):
    """In-memory copy of the five collections the engine reads."""

    model_config = ConfigDict(frozen=True)

    error_records: List[ErrorBankEntry] = []
    completed_sessions: List[Session] = []
    groups: List[Group] = []
    trackings: List[StudentSessionTracking] = []
    students: List[Student] = []
