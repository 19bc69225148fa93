"""
Repositories package for the error-pattern analytics system.

This package contains the read-only repository classes used for
accessing the intervention data snapshot.
"""

from .base_repository import BaseRepository
from .error_bank_repository import ErrorBankRepository
from .session_repository import SessionRepository
from .group_repository import GroupRepository, StudentRepository
from .tracking_repository import TrackingRepository

__all__ = [
    "BaseRepository",
    "ErrorBankRepository",
    "SessionRepository",
    "GroupRepository",
    "StudentRepository",
    "TrackingRepository",
]
