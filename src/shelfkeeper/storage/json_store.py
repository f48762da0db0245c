"""JSON file record store.

Each collection lives in its own ``<data_dir>/<collection>.json`` file.
"""

import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel

from . import codec
from .base import CodecError, RecordStore, RecordT

logger = logging.getLogger(__name__)


class JsonRecordStore(RecordStore):
    """Stores each collection as a JSON document."""

    def __init__(self, data_dir: Path, pretty: bool = True):
        """Initialize store.

        Args:
            data_dir: Directory holding one file per collection
            pretty: Indent the written JSON
        """
        self.data_dir = Path(data_dir)
        self.pretty = pretty

    def path_for(self, collection: str) -> Path:
        """Get the file path backing a collection."""
        return self.data_dir / f"{collection}.json"

    def save(self, collection: str, records: Sequence[BaseModel]) -> bool:
        path = self.path_for(collection)
        text = codec.encode(collection, records, pretty=self.pretty)

        tmp_name = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            # Write next to the target so the final rename stays on one filesystem
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.data_dir,
                prefix=f".{collection}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError:
            logger.exception("Could not save %s to %s", collection, path)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False

        logger.debug("Saved %d %s record(s) to %s", len(records), collection, path)
        return True

    def load(self, collection: str, schema: type[RecordT]) -> list[RecordT]:
        path = self.path_for(collection)

        if not path.exists():
            self._log_empty(collection)
            return []

        try:
            text = path.read_text(encoding="utf-8")
            records = codec.decode(collection, text, schema)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            self._log_empty(collection)
            return []
        except CodecError as e:
            logger.warning("Ignoring unreadable %s store %s: %s", collection, path, e)
            self._log_empty(collection)
            return []

        logger.debug("Loaded %d %s record(s) from %s", len(records), collection, path)
        return records
