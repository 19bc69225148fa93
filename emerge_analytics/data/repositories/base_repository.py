"""
Base repository for the error-pattern analytics system.

This module provides the BaseRepository abstract class that serves as the
foundation for all entity-specific repositories. It defines common read
operations and utility methods for working with exported data sets.
Repositories are read-only: the analytics engine never writes back.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
import json
import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from emerge_analytics.data.db.inmemory_db import InMemoryCollection, InMemoryDatabase
from emerge_analytics.data.exceptions import DataAccessError

# Type variable for the model type
T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T], ABC):
    """
    Base repository for data access.

    This abstract class provides common read operations and utility methods
    for working with stored documents through Pydantic models.

    Attributes:
        _collection_name (str): Name of the data collection
        _model_class (Type[T]): Pydantic model class for this repository
        _db (Optional[InMemoryDatabase]): Shared document store
        _config (Optional[Any]): Settings object providing data file paths
    """

    def __init__(
        self,
        collection_name: str,
        model_class: Type[T],
        db: Optional[InMemoryDatabase] = None,
        config: Optional[Any] = None,
    ):
        """
        Initialize the repository.

        Args:
            collection_name: Name of the data collection
            model_class: Pydantic model class to use for this repository
            db: Optional shared database; when omitted, connect() loads the
                collection from the JSON file named in the settings
            config: Optional settings object
        """
        self._collection_name = collection_name
        self._model_class = model_class
        self._db = db
        self._config = config
        self._logger = logging.getLogger(f"{self.__class__.__name__}")

    @property
    @abstractmethod
    def data_path_setting(self) -> str:
        """Name of the Settings attribute holding this collection's JSON file path."""

    def connect(self) -> None:
        """
        Connect to the data source.

        When no shared database was injected, the collection is loaded from
        its JSON file into a private in-memory database.

        Raises:
            DataAccessError: If the data file cannot be read
        """
        if self._db is not None:
            return

        self._db = InMemoryDatabase()
        file_path = getattr(self._config, self.data_path_setting, None)
        if file_path is None:
            self._logger.warning(
                f"No data path configured for {self._collection_name}; using an empty collection"
            )
            return

        self.load_data_from_file(file_path)

    @property
    def collection(self) -> InMemoryCollection:
        """
        Get the data collection.

        Returns:
            The data collection object

        Raises:
            DataAccessError: If the database connection is not established
        """
        if self._db is None:
            raise DataAccessError(
                self._collection_name,
                "database connection not established, call connect() first",
            )
        return self._db[self._collection_name]

    def load_data_from_file(self, file_path: Any) -> int:
        """
        Load documents from a JSON file into the collection, replacing it.

        A missing file is an empty collection; an unreadable or malformed
        file is a read failure.

        Args:
            file_path: Path to the JSON file

        Returns:
            int: Number of documents loaded

        Raises:
            DataAccessError: If the file cannot be read or parsed
        """
        path = Path(file_path)
        if not path.exists():
            self._logger.warning(f"Data file not found: {path}; {self._collection_name} is empty")
            return 0

        try:
            with open(path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except (OSError, json.JSONDecodeError) as e:
            self._logger.error(f"Error loading {self._collection_name} from {path}: {e}")
            raise DataAccessError(self._collection_name, str(e)) from e

        if self._db is None:
            self._db = InMemoryDatabase()
        self._db.drop_collection(self._collection_name)

        documents = data if isinstance(data, list) else [data]
        self._db.insert_many(self._collection_name, documents)
        self._logger.info(f"Loaded {len(documents)} {self._collection_name} documents from {path}")
        return len(documents)

    def _to_model(self, data: Dict[str, Any]) -> Optional[T]:
        """
        Convert a raw document to a Pydantic model.

        Args:
            data: Raw document

        Returns:
            Optional[T]: Model instance, or None if the document is invalid
        """
        try:
            return self._model_class.model_validate(data)
        except ValidationError as e:
            self._logger.warning(
                f"Skipping invalid {self._collection_name} document "
                f"(id={data.get('id') if isinstance(data, dict) else None}): "
                f"{e.error_count()} validation error(s)"
            )
            self._logger.debug(str(e))
            return None

    def find_many(
        self,
        query: Dict[str, Any],
        skip: int = 0,
        limit: Optional[int] = None,
        sort_by: Optional[str] = None,
        sort_direction: int = 1,  # 1 for ascending, -1 for descending
    ) -> List[T]:
        """
        Find multiple documents matching the query.

        Args:
            query: Query dictionary
            skip: Number of documents to skip
            limit: Maximum number of documents to return (None for all)
            sort_by: Field to sort by (None keeps storage order)
            sort_direction: Sort direction (1=ascending, -1=descending)

        Returns:
            List[T]: Valid model instances, invalid documents skipped

        Raises:
            DataAccessError: If the collection cannot be read
        """
        try:
            cursor = self.collection.find(query)
            if sort_by:
                cursor = cursor.sort(sort_by, sort_direction)
            documents = list(cursor)
        except DataAccessError:
            raise
        except Exception as e:
            self._logger.error(f"Error querying {self._collection_name}: {e}")
            raise DataAccessError(self._collection_name, str(e)) from e

        # Skip and limit count valid models only
        models = [model for model in map(self._to_model, documents) if model is not None]
        end = None if limit is None else skip + limit
        return models[skip:end]

    def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        """
        Find a single document matching the query.

        Invalid documents are skipped before the first match is taken.

        Args:
            query: Query dictionary

        Returns:
            Optional[T]: First valid model instance or None if not found
        """
        results = self.find_many(query)
        return results[0] if results else None

    def find_by_id(self, id_value: int) -> Optional[T]:
        """
        Find a document by its id.

        Args:
            id_value: Document id

        Returns:
            Optional[T]: Model instance or None if not found
        """
        return self.find_one({"id": id_value})

    def get_all(self) -> List[T]:
        """
        Get all documents from the collection.

        Returns:
            List[T]: List of model instances in storage order
        """
        return self.find_many({})

    def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        """
        Count documents matching the query.

        Args:
            query: Query dictionary

        Returns:
            int: Number of matching documents
        """
        return self.collection.count_documents(query or {})

    def get_data_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the data in the collection.

        Returns:
            Dict[str, Any]: Summary information
        """
        return {
            "collection": self._collection_name,
            "document_count": self.count(),
            "model_type": self._model_class.__name__,
        }
