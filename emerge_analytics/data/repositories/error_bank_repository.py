"""
Error bank repository for the error-pattern analytics system.

This module provides data access and query methods for ErrorBankEntry
entities: the cumulative occurrence and effectiveness counters for every
known error pattern.
"""

from typing import List, Optional

from ..models.error_bank_model import ErrorBankEntry
from ..models.enums import Curriculum
from .base_repository import BaseRepository


class ErrorBankRepository(BaseRepository[ErrorBankEntry]):
    """Repository for error bank entries."""

    data_path_setting = "ERROR_BANK_DATA_PATH"

    def __init__(self, db=None, config=None):
        """
        Initialize the error bank repository.

        Args:
            db: Optional shared database
            config: Optional configuration object
        """
        super().__init__("error_bank", ErrorBankEntry, db=db, config=config)

    def list_error_records(self) -> List[ErrorBankEntry]:
        """
        Get every error bank entry, in storage order.

        Returns:
            List[ErrorBankEntry]: All valid entries
        """
        return self.get_all()

    def find_by_curriculum(self, curriculum: Curriculum) -> List[ErrorBankEntry]:
        """
        Get entries belonging to one curriculum.

        Args:
            curriculum: Curriculum to filter on

        Returns:
            List[ErrorBankEntry]: Matching entries
        """
        return self.find_many({"curriculum": Curriculum(curriculum).value})

    def find_by_pattern(self, error_pattern: str) -> Optional[ErrorBankEntry]:
        """
        Get the first entry recorded for a pattern.

        Args:
            error_pattern: Pattern name

        Returns:
            Optional[ErrorBankEntry]: Entry or None
        """
        return self.find_one({"error_pattern": error_pattern})

    def get_curricula(self) -> List[str]:
        """
        Get the curricula that have at least one entry, in first-seen order.

        Returns:
            List[str]: Curriculum values
        """
        return self.collection.distinct("curriculum")
