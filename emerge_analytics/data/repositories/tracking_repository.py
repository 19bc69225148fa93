"""
Student session tracking repository for the error-pattern analytics system.

This module provides data access for per-student, per-session tracking
records (errors exhibited and correction outcomes).
"""

from typing import List

from ..models.tracking_model import StudentSessionTracking
from .base_repository import BaseRepository


class TrackingRepository(BaseRepository[StudentSessionTracking]):
    """Repository for student session tracking records."""

    data_path_setting = "TRACKING_DATA_PATH"

    def __init__(self, db=None, config=None):
        super().__init__(
            "student_session_tracking", StudentSessionTracking, db=db, config=config
        )

    def list_student_session_trackings(self) -> List[StudentSessionTracking]:
        """
        Get every tracking record, in storage order.

        Returns:
            List[StudentSessionTracking]: All valid tracking records
        """
        return self.get_all()

    def find_by_student(self, student_id: int) -> List[StudentSessionTracking]:
        """
        Get all tracking records for one student, across sessions.

        Args:
            student_id: Student identifier

        Returns:
            List[StudentSessionTracking]: The student's records
        """
        return self.find_many({"student_id": student_id})
