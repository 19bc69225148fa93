"""
In-memory document store for the error-pattern analytics system.

Exported collections (error bank, sessions, groups, students, tracking) are
loaded from JSON into this store so the repositories can query them with
Mongo-style filters. Every query is a linear scan; the data sets are the
size of one school's intervention records.
"""

import logging
import operator
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

# Comparison operators; None never satisfies an ordering comparison
_ORDERING_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
}

_MISSING = object()


def get_path(document: Dict[str, Any], path: str) -> Any:
    """
    Resolve a dotted field path such as "errors_observed.error_pattern".

    Args:
        document: Stored document
        path: Field name, dots for nested mappings

    Returns:
        The value, or None when any part of the path is absent
    """
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part, _MISSING)
        if value is _MISSING:
            return None
    return value


def _condition_holds(value: Any, condition: Dict[str, Any]) -> bool:
    for op, expected in condition.items():
        if op in _ORDERING_OPERATORS:
            if value is None or not _ORDERING_OPERATORS[op](value, expected):
                return False
        elif op == "$eq":
            if value != expected:
                return False
        elif op == "$ne":
            if value == expected:
                return False
        elif op == "$in":
            if value not in expected:
                return False
        elif op == "$nin":
            if value in expected:
                return False
        else:
            raise ValueError(f"Unsupported query operator: {op}")
    return True


def matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    """
    Check a document against a Mongo-style query.

    Supports equality, array membership (a scalar matches any element of a
    list field), $eq $ne $gt $gte $lt $lte $in $nin, and $and/$or.

    Args:
        document: Stored document
        query: Query mapping

    Returns:
        bool: True if every clause holds

    Raises:
        ValueError: If the query uses an unknown operator
    """
    for key, clause in query.items():
        if key == "$and":
            if not all(matches(document, sub) for sub in clause):
                return False
            continue
        if key == "$or":
            if not any(matches(document, sub) for sub in clause):
                return False
            continue
        if key.startswith("$"):
            raise ValueError(f"Unsupported logical operator: {key}")

        value = get_path(document, key)
        if isinstance(clause, dict) and clause and all(k.startswith("$") for k in clause):
            if not _condition_holds(value, clause):
                return False
        elif isinstance(value, list):
            if clause not in value:
                return False
        elif value != clause:
            return False
    return True


class InMemoryCursor:
    """Chainable result set returned by InMemoryCollection.find()."""

    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def sort(self, field: str, direction: int = 1) -> "InMemoryCursor":
        """
        Order results by one field. Ties keep storage order and documents
        missing the field come first when ascending.

        Args:
            field: Field path
            direction: 1 for ascending, -1 for descending

        Returns:
            InMemoryCursor: This cursor
        """

        def sort_key(document):
            value = get_path(document, field)
            return (value is not None, value)

        self._documents = sorted(self._documents, key=sort_key, reverse=direction == -1)
        return self

    def skip(self, count: int) -> "InMemoryCursor":
        """Drop the first `count` results."""
        self._documents = self._documents[count:]
        return self

    def limit(self, count: int) -> "InMemoryCursor":
        """Keep at most `count` results."""
        self._documents = self._documents[:count]
        return self


class InMemoryCollection:
    """One named collection of raw JSON documents, in storage order."""

    def __init__(self, name: str):
        self.name = name
        self.documents: List[Dict[str, Any]] = []

    def insert_many(self, documents: Iterable[Dict[str, Any]]) -> None:
        self.documents.extend(documents)

    def find(self, query: Optional[Dict[str, Any]] = None) -> InMemoryCursor:
        """
        Find all documents matching the query.

        Args:
            query: Query mapping (default: everything)

        Returns:
            InMemoryCursor: Matches in storage order
        """
        query = query or {}
        return InMemoryCursor([doc for doc in self.documents if matches(doc, query)])

    def count_documents(self, query: Optional[Dict[str, Any]] = None) -> int:
        return len(self.find(query))

    def distinct(self, field: str, query: Optional[Dict[str, Any]] = None) -> List[Any]:
        """
        Get the distinct non-null values of a field, in first-seen order.

        Args:
            field: Field path
            query: Optional filter

        Returns:
            List: Distinct values
        """
        values: List[Any] = []
        for document in self.find(query):
            value = get_path(document, field)
            if value is not None and value not in values:
                values.append(value)
        return values


class InMemoryDatabase:
    """Named collections, created on first access."""

    def __init__(self):
        self.collections: Dict[str, InMemoryCollection] = {}
        self._logger = logging.getLogger(self.__class__.__name__)

    def __getitem__(self, collection_name: str) -> InMemoryCollection:
        if collection_name not in self.collections:
            self._logger.debug(f"Creating collection {collection_name}")
            self.collections[collection_name] = InMemoryCollection(collection_name)
        return self.collections[collection_name]

    def insert_many(self, collection_name: str, documents: Iterable[Dict[str, Any]]) -> None:
        """
        Append documents to a collection.

        Args:
            collection_name: Collection name
            documents: Raw documents
        """
        self[collection_name].insert_many(documents)

    def drop_collection(self, collection_name: str) -> None:
        """Remove a collection and its documents, if present."""
        self.collections.pop(collection_name, None)

    def count(self, collection_name: str, query: Optional[Dict[str, Any]] = None) -> int:
        """
        Count documents in a collection.

        Args:
            collection_name: Collection name
            query: Optional filter

        Returns:
            int: Number of matching documents
        """
        return self[collection_name].count_documents(query)
