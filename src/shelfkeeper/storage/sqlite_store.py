"""SQLite record store.

Each collection lives in its own ``<data_dir>/<collection>.db`` database.

Tables:
- collection_meta: Collection name, schema version and save time
- records: One row per record, ordered by position
"""

import logging
from collections.abc import Sequence
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

from pydantic import BaseModel
from sqlalchemy import Integer, String, Text, create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DatabaseError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from . import codec
from .base import CodecError, RecordStore, RecordT

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for record store tables."""

    pass


class CollectionMeta(Base):
    """Describes the collection stored in the database file."""

    __tablename__ = "collection_meta"

    name: Mapped[str] = mapped_column(String(200), primary_key=True)
    schema_version: Mapped[int] = mapped_column(Integer, nullable=False)
    saved_at: Mapped[str] = mapped_column(String(32), nullable=False)

    def __repr__(self) -> str:
        return f"<CollectionMeta(name='{self.name}', schema_version={self.schema_version})>"


class StoredRecord(Base):
    """A single encoded record."""

    __tablename__ = "records"

    position: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    payload: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<StoredRecord(position={self.position})>"


class CollectionDatabase:
    """Connection and session management for one collection file."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.engine: Engine = create_engine(
            f"sqlite:///{self.db_path}",
            echo=False,
            connect_args={"check_same_thread": False},
        )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def create_tables(self) -> None:
        """Create the record store tables."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()


class SqliteRecordStore(RecordStore):
    """Stores each collection in a SQLite database via SQLAlchemy."""

    def __init__(self, data_dir: Path):
        """Initialize store.

        Args:
            data_dir: Directory holding one database file per collection
        """
        self.data_dir = Path(data_dir)
        self._databases: dict[str, CollectionDatabase] = {}

    def path_for(self, collection: str) -> Path:
        """Get the database file backing a collection."""
        return self.data_dir / f"{collection}.db"

    def _database(self, collection: str) -> CollectionDatabase:
        db = self._databases.get(collection)
        if db is None:
            db = CollectionDatabase(self.path_for(collection))
            self._databases[collection] = db
        return db

    def save(self, collection: str, records: Sequence[BaseModel]) -> bool:
        path = self.path_for(collection)
        rows = [
            StoredRecord(position=position, payload=codec.dump_record(record))
            for position, record in enumerate(records)
        ]

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            db = self._database(collection)
            db.create_tables()
            # Rewrite the whole collection in a single transaction
            with db.get_session() as session:
                session.execute(delete(StoredRecord))
                session.add_all(rows)
                session.merge(
                    CollectionMeta(
                        name=collection,
                        schema_version=codec.SCHEMA_VERSION,
                        saved_at=datetime.now(timezone.utc).isoformat(),
                    )
                )
        except (SQLAlchemyError, OSError):
            logger.exception("Could not save %s to %s", collection, path)
            return False

        logger.debug("Saved %d %s record(s) to %s", len(rows), collection, path)
        return True

    def load(self, collection: str, schema: type[RecordT]) -> list[RecordT]:
        path = self.path_for(collection)

        if not path.exists():
            self._log_empty(collection)
            return []

        try:
            with self._database(collection).get_session() as session:
                meta = session.get(CollectionMeta, collection)
                if meta is None:
                    raise CodecError(f"No {collection} collection in {path.name}")
                codec.check_version(meta.schema_version)

                stmt = select(StoredRecord.payload).order_by(StoredRecord.position)
                payloads = list(session.execute(stmt).scalars().all())
            records = codec.load_records(payloads, schema)
        except OperationalError as e:
            logger.warning("Could not read %s: %s", path, e)
            self._log_empty(collection)
            return []
        except DatabaseError as e:
            logger.warning("Could not read %s: %s", path, e)
            self._set_aside(collection)
            self._log_empty(collection)
            return []
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Could not read %s: %s", path, e)
            self._log_empty(collection)
            return []
        except CodecError as e:
            logger.warning("Ignoring unreadable %s store %s: %s", collection, path, e)
            self._log_empty(collection)
            return []

        logger.debug("Loaded %d %s record(s) from %s", len(records), collection, path)
        return records

    def corrupt_path_for(self, collection: str) -> Path:
        """Get the path a damaged database file is moved to."""
        path = self.path_for(collection)
        return path.with_name(f"{path.name}.corrupt")

    def _set_aside(self, collection: str) -> None:
        """Move a damaged database file out of the way.

        The next save then starts a fresh database at the usual path.
        """
        db = self._databases.pop(collection, None)
        if db is not None:
            db.dispose()

        path = self.path_for(collection)
        target = self.corrupt_path_for(collection)
        try:
            path.replace(target)
        except OSError:
            logger.exception("Could not move damaged %s aside", path)
            return
        logger.warning("Moved damaged %s to %s", path, target)

    def close(self) -> None:
        for db in self._databases.values():
            db.dispose()
        self._databases.clear()
