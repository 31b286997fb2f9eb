"""
SQLAlchemy record store

Each resource maps to its own table (see school_api.models.records).
Every operation runs in its own session and commits or rolls back on its
own, which gives atomic per-record writes.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from school_api.db.base import get_session_factory, init_db

from ..exceptions import RecordNotFoundError, StorageError
from .base import Record, RecordStore, StoreConfig

logger = logging.getLogger(__name__)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlRecordStore(RecordStore):
    """Relational adapter for one resource table"""

    def __init__(self, config: StoreConfig):
        super().__init__(config)
        if config.model is None:
            raise ValueError(f"SQL store for {config.resource} needs a table model")
        if not config.database_uri:
            raise ValueError(f"SQL store for {config.resource} needs a database URI")
        self.model = config.model
        self._session_factory = None

    def connect(self) -> None:
        try:
            init_db(self.config.database_uri)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to initialise table {self.model.__tablename__}: {e}")
        self._session_factory = get_session_factory(self.config.database_uri)
        logger.info(f"Using table {self.model.__tablename__} for {self.resource}")

    def disconnect(self) -> None:
        self._session_factory = None

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._session_factory is None:
            raise StorageError(f"SQL store for {self.resource} is not connected")
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IntegrityError as e:
            session.rollback()
            raise StorageError(f"Integrity error on {self.model.__tablename__}: {e.orig}")
        except (SQLAlchemyError, OverflowError, ValueError, TypeError) as e:
            # Driver errors SQLAlchemy does not wrap, e.g. an int too large for the column
            session.rollback()
            raise StorageError(str(e))
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        try:
            with self._session() as session:
                session.execute(text("SELECT 1"))
            return True
        except StorageError as e:
            logger.warning(f"Database ping failed for {self.resource}: {e}")
            return False

    def _get_row(self, session: Session, record_id: str):
        row = session.get(self.model, record_id)
        if row is None:
            raise RecordNotFoundError(f"No {self.resource} record with id {record_id}")
        return row

    def list_records(self) -> List[Record]:
        with self._session() as session:
            return [row.to_dict() for row in session.query(self.model).all()]

    def get_record(self, record_id: str) -> Record:
        with self._session() as session:
            return self._get_row(session, record_id).to_dict()

    def search_records(self, field: str, term: str) -> List[Record]:
        column = getattr(self.model, field, None)
        if column is None:
            return []
        pattern = f"%{_escape_like(term)}%"
        with self._session() as session:
            rows = session.query(self.model).filter(column.ilike(pattern, escape="\\")).all()
            return [row.to_dict() for row in rows]

    def insert_record(self, record: Record) -> Record:
        with self._session() as session:
            row = self.model.from_record(record)
            session.add(row)
            session.flush()
            return row.to_dict()

    def update_record(self, record_id: str, record: Record) -> Record:
        with self._session() as session:
            row = self._get_row(session, record_id)
            row.apply(record)
            session.flush()
            return row.to_dict()

    def delete_record(self, record_id: str) -> Record:
        with self._session() as session:
            row = self._get_row(session, record_id)
            removed = row.to_dict()
            session.delete(row)
            return removed
