import threading
from typing import Dict, List, Optional

from string_analyzer.crud.base import StringStore
from string_analyzer.schemas.string_record import StringRecord


class InMemoryStringStore(StringStore):
    """Process-local store; contents are lost on restart"""

    def __init__(self):
        self._lock = threading.Lock()
        # dicts keep insertion order, which breaks created_at ties
        self._records: Dict[str, StringRecord] = {}

    def insert_if_absent(self, record: StringRecord) -> bool:
        with self._lock:
            if record.id in self._records:
                return False
            self._records[record.id] = record
            return True

    def exists(self, record_id: str) -> bool:
        with self._lock:
            return record_id in self._records

    def get(self, record_id: str) -> Optional[StringRecord]:
        with self._lock:
            return self._records.get(record_id)

    def get_all(self) -> List[StringRecord]:
        with self._lock:
            snapshot = list(self._records.values())
        # sorted() is stable, so insertion order survives for equal timestamps
        return sorted(snapshot, key=lambda r: r.created_at)

    def delete(self, record_id: str) -> None:
        with self._lock:
            self._records.pop(record_id, None)
