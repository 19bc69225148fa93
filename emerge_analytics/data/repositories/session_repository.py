"""
Session repository for the error-pattern analytics system.

This module provides data access for intervention sessions. The analytics
engine only ever sees completed sessions; planned and cancelled sessions
are filtered out here, at the storage boundary.
"""

from typing import List

from ..models.session_model import Session
from ..models.enums import SessionStatus
from .base_repository import BaseRepository


class SessionRepository(BaseRepository[Session]):
    """Repository for intervention sessions."""

    data_path_setting = "SESSION_DATA_PATH"

    def __init__(self, db=None, config=None):
        """
        Initialize the session repository.

        Args:
            db: Optional shared database
            config: Optional configuration object
        """
        super().__init__("sessions", Session, db=db, config=config)

    def list_completed_sessions(self) -> List[Session]:
        """
        Get every completed session, in storage order.

        Returns:
            List[Session]: Completed sessions
        """
        return self.find_many({"status": SessionStatus.COMPLETED.value})

    def find_by_group(self, group_id: int, completed_only: bool = True) -> List[Session]:
        """
        Get a group's sessions ordered by date.

        Args:
            group_id: Group identifier
            completed_only: Whether to drop planned and cancelled sessions

        Returns:
            List[Session]: Sessions, oldest first
        """
        query = {"group_id": group_id}
        if completed_only:
            query["status"] = SessionStatus.COMPLETED.value
        return self.find_many(query, sort_by="date")
