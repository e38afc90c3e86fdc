from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from datetime import timezone
from typing import List, Optional
import logging

from string_analyzer.crud.base import StringStore
from string_analyzer.models.string_record import StringRecordRow
from string_analyzer.schemas.string_record import StringProperties, StringRecord

logger = logging.getLogger(__name__)


def row_to_record(row: StringRecordRow) -> StringRecord:
    """Convert a database row into a StringRecord"""
    created_at = row.created_at
    # SQLite hands back naive datetimes; everything is stored as UTC
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)

    return StringRecord(
        id=row.id,
        value=row.value,
        properties=StringProperties(
            length=row.length,
            is_palindrome=row.is_palindrome,
            unique_characters=row.unique_characters,
            word_count=row.word_count,
            sha256_hash=row.sha256_hash,
            character_frequency_map=row.character_frequency_map,
        ),
        created_at=created_at,
    )


def record_to_row(record: StringRecord) -> StringRecordRow:
    """Convert a StringRecord into a new database row"""
    props = record.properties
    return StringRecordRow(
        id=record.id,
        value=record.value,
        length=props.length,
        is_palindrome=props.is_palindrome,
        unique_characters=props.unique_characters,
        word_count=props.word_count,
        sha256_hash=props.sha256_hash,
        character_frequency_map=dict(props.character_frequency_map),
        created_at=record.created_at,
    )


def get_row_by_id(db: Session, record_id: str) -> Optional[StringRecordRow]:
    """Get string row by ID (hash)"""
    return db.query(StringRecordRow).filter(StringRecordRow.id == record_id).first()


class SqlStringStore(StringStore):
    """Store backed by a SQLAlchemy database; one short-lived session per call"""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    def insert_if_absent(self, record: StringRecord) -> bool:
        with self.session_factory() as db:
            if get_row_by_id(db, record.id) is not None:
                return False
            db.add(record_to_row(record))
            try:
                db.commit()
            except IntegrityError:
                # Another writer inserted the same id between the check and the commit
                db.rollback()
                logger.info(f"Concurrent insert detected for {record.id}")
                return False
            return True

    def exists(self, record_id: str) -> bool:
        with self.session_factory() as db:
            return get_row_by_id(db, record_id) is not None

    def get(self, record_id: str) -> Optional[StringRecord]:
        with self.session_factory() as db:
            row = get_row_by_id(db, record_id)
            return row_to_record(row) if row else None

    def get_all(self) -> List[StringRecord]:
        with self.session_factory() as db:
            rows = (
                db.query(StringRecordRow)
                .order_by(StringRecordRow.created_at.asc(), StringRecordRow.pk.asc())
                .all()
            )
            return [row_to_record(row) for row in rows]

    def delete(self, record_id: str) -> None:
        with self.session_factory() as db:
            row = get_row_by_id(db, record_id)
            if row:
                db.delete(row)
                db.commit()
