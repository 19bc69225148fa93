"""
Group and student repositories for the error-pattern analytics system.

This module provides data access for intervention groups and the students
enrolled in them.
"""

from typing import List

from ..models.group_model import Group, Student
from .base_repository import BaseRepository


class GroupRepository(BaseRepository[Group]):
    """Repository for intervention groups."""

    data_path_setting = "GROUP_DATA_PATH"

    def __init__(self, db=None, config=None):
        super().__init__("groups", Group, db=db, config=config)

    def list_groups(self) -> List[Group]:
        """
        Get every group, in storage order.

        Returns:
            List[Group]: All valid groups
        """
        return self.get_all()


class StudentRepository(BaseRepository[Student]):
    """Repository for students."""

    data_path_setting = "STUDENT_DATA_PATH"

    def __init__(self, db=None, config=None):
        super().__init__("students", Student, db=db, config=config)

    def list_students(self) -> List[Student]:
        """
        Get every student, in storage order.

        Returns:
            List[Student]: All valid students
        """
        return self.get_all()

    def find_by_group(self, group_id: int) -> List[Student]:
        """
        Get the students enrolled in a group.

        Args:
            group_id: Group identifier

        Returns:
            List[Student]: Group members
        """
        return self.find_many({"group_id": group_id})
