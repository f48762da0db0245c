"""Base record store functionality.

A record store persists a named, ordered collection of records. Every
backend follows the same contract:

- ``save`` overwrites the whole collection and reports failure through its
  return value instead of raising.
- ``load`` returns an empty list when the collection is missing, unreadable
  or encoded with a schema the current code cannot interpret.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class StorageError(Exception):
    """Storage-specific error."""

    pass


class CodecError(StorageError):
    """Stored data could not be encoded or decoded."""

    pass


class RecordStore(ABC):
    """Abstract base class for durable record stores."""

    @abstractmethod
    def save(self, collection: str, records: Sequence[BaseModel]) -> bool:
        """Replace the stored collection with ``records``.

        Args:
            collection: Collection name
            records: Full ordered sequence of records

        Returns:
            True if the records were written, False if the medium failed
        """
        pass

    @abstractmethod
    def load(self, collection: str, schema: type[RecordT]) -> list[RecordT]:
        """Read a stored collection.

        Args:
            collection: Collection name
            schema: Record model used to validate each stored record

        Returns:
            Stored records in order, or an empty list if nothing usable is stored
        """
        pass

    def close(self) -> None:
        """Release backend resources."""
        pass

    def _log_empty(self, collection: str) -> None:
        logger.info("Starting with an empty %s list.", collection)

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
