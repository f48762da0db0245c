"""In-process record store.

Keeps encoded collections in a dictionary. Nothing survives the process,
but records still pass through the codec so behaviour matches the file
backends.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel

from . import codec
from .base import CodecError, RecordStore, RecordT

logger = logging.getLogger(__name__)


class MemoryRecordStore(RecordStore):
    """Stores encoded collections in memory."""

    def __init__(self, documents: Optional[dict[str, str]] = None):
        """Initialize store.

        Args:
            documents: Pre-encoded collections keyed by collection name
        """
        self.documents: dict[str, str] = dict(documents or {})

    def save(self, collection: str, records: Sequence[BaseModel]) -> bool:
        self.documents[collection] = codec.encode(collection, records, pretty=False)
        return True

    def load(self, collection: str, schema: type[RecordT]) -> list[RecordT]:
        text = self.documents.get(collection)
        if text is None:
            self._log_empty(collection)
            return []

        try:
            return codec.decode(collection, text, schema)
        except CodecError as e:
            logger.warning("Ignoring unreadable %s collection: %s", collection, e)
            self._log_empty(collection)
            return []
