"""
Main data repository for the error-pattern analytics system.

This module provides the DataRepository class that serves as the primary
entry point for accessing all entity-specific repositories, and the snapshot
loader that reads the five collections the analytics engine works on.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from config.settings import Settings
from emerge_analytics.data.db.inmemory_db import InMemoryDatabase
from emerge_analytics.data.exceptions import DataAccessError
from emerge_analytics.data.models.snapshot_model import AnalysisSnapshot
from emerge_analytics.data.repositories.error_bank_repository import ErrorBankRepository
from emerge_analytics.data.repositories.session_repository import SessionRepository
from emerge_analytics.data.repositories.group_repository import (
    GroupRepository,
    StudentRepository,
)
from emerge_analytics.data.repositories.tracking_repository import TrackingRepository

# Snapshot field name -> (repository attribute, accessor name)
SNAPSHOT_COLLECTIONS: Dict[str, tuple] = {
    "error_records": ("_error_bank_repo", "list_error_records"),
    "completed_sessions": ("_session_repo", "list_completed_sessions"),
    "groups": ("_group_repo", "list_groups"),
    "trackings": ("_tracking_repo", "list_student_session_trackings"),
    "students": ("_student_repo", "list_students"),
}


class DataRepository:
    """
    Main data repository for coordinating access to all entity-specific repositories.

    This class serves as a facade over the repository classes and owns the
    shared in-memory database they read from.
    """

    def __init__(self, config: Optional[Settings] = None, db: Optional[InMemoryDatabase] = None):
        """
        Initialize the data repository.

        Args:
            config: Optional settings configuration
            db: Optional pre-populated database; when omitted, connect()
                loads each collection from the JSON files named in settings
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._config = config or Settings()
        self._db = db

        # Repositories share the injected database, or load their own file
        self._error_bank_repo = ErrorBankRepository(db=db, config=self._config)
        self._session_repo = SessionRepository(db=db, config=self._config)
        self._group_repo = GroupRepository(db=db, config=self._config)
        self._student_repo = StudentRepository(db=db, config=self._config)
        self._tracking_repo = TrackingRepository(db=db, config=self._config)

        # Track whether data has been loaded
        self._data_loaded = False

    def connect(self) -> None:
        """
        Connect to all data sources.

        Raises:
            DataAccessError: If any collection cannot be read
        """
        if self._data_loaded:
            return

        try:
            for repo in self._all_repositories():
                repo.connect()
        except DataAccessError as e:
            self._logger.error(f"Error connecting to data sources: {e}")
            raise

        self._data_loaded = True
        self._logger.info("Successfully connected to all data sources")

    @property
    def error_bank(self) -> ErrorBankRepository:
        """Get the error bank repository."""
        self._ensure_connected()
        return self._error_bank_repo

    @property
    def sessions(self) -> SessionRepository:
        """Get the session repository."""
        self._ensure_connected()
        return self._session_repo

    @property
    def groups(self) -> GroupRepository:
        """Get the group repository."""
        self._ensure_connected()
        return self._group_repo

    @property
    def students(self) -> StudentRepository:
        """Get the student repository."""
        self._ensure_connected()
        return self._student_repo

    @property
    def trackings(self) -> TrackingRepository:
        """Get the student session tracking repository."""
        self._ensure_connected()
        return self._tracking_repo

    def _all_repositories(self) -> List[Any]:
        return [
            self._error_bank_repo,
            self._session_repo,
            self._group_repo,
            self._student_repo,
            self._tracking_repo,
        ]

    def _ensure_connected(self) -> None:
        """Connect on first access."""
        if not self._data_loaded:
            self.connect()

    def load_data_from_directory(self, directory_path: str) -> Dict[str, int]:
        """
        Load data from the exported JSON files in a directory.

        Missing files leave their collection empty.

        Args:
            directory_path: Path to directory containing JSON data files

        Returns:
            Dict[str, int]: Number of documents loaded per file

        Raises:
            DataAccessError: If a present file cannot be read or parsed
        """
        results = {}
        path = Path(directory_path)
        if self._db is None:
            self._db = InMemoryDatabase()

        # Define file mappings for each repository
        file_mappings = {
            "error_bank.json": self._error_bank_repo,
            "sessions.json": self._session_repo,
            "groups.json": self._group_repo,
            "students.json": self._student_repo,
            "student_session_tracking.json": self._tracking_repo,
        }

        for filename, repo in file_mappings.items():
            repo._db = self._db
            file_path = path / filename
            if not file_path.exists():
                self._logger.warning(f"No {filename} in {path}; collection left empty")
                results[filename] = 0
                continue
            results[filename] = repo.load_data_from_file(file_path)

        self._data_loaded = True
        return results

    def load_snapshot(self, collections: Optional[Iterable[str]] = None) -> AnalysisSnapshot:
        """
        Read collections concurrently and join them into one snapshot.

        The reads are independent and issued together; computation starts
        only after every read has returned. The first failed read aborts the
        load and is re-raised unchanged.

        Args:
            collections: Snapshot fields to read (default: all five); fields
                not requested are left empty

        Returns:
            AnalysisSnapshot: Materialized, read-only collections

        Raises:
            DataAccessError: If any requested read fails
        """
        self._ensure_connected()
        requested = list(collections) if collections is not None else list(SNAPSHOT_COLLECTIONS)
        unknown = [name for name in requested if name not in SNAPSHOT_COLLECTIONS]
        if unknown:
            raise ValueError(f"Unknown snapshot collections: {unknown}")

        readers: Dict[str, Callable[[], List[Any]]] = {}
        for name in requested:
            repo_attr, accessor = SNAPSHOT_COLLECTIONS[name]
            readers[name] = getattr(getattr(self, repo_attr), accessor)

        workers = max(1, min(int(self._config.LOAD_WORKERS), len(readers) or 1))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {name: executor.submit(read) for name, read in readers.items()}
            loaded = {name: future.result() for name, future in futures.items()}

        self._logger.debug(
            "Loaded snapshot: "
            + ", ".join(f"{name}={len(items)}" for name, items in loaded.items())
        )
        return AnalysisSnapshot(**loaded)

    def get_data_summary(self) -> Dict[str, Any]:
        """
        Get a summary of all loaded data.

        Returns:
            Dict[str, Any]: Document counts per collection plus curricula present
        """
        self._ensure_connected()
        summary = {
            repo._collection_name: repo.get_data_summary()["document_count"]
            for repo in self._all_repositories()
        }
        summary["completed_sessions"] = len(self._session_repo.list_completed_sessions())
        summary["curricula"] = self._error_bank_repo.get_curricula()
        return summary

