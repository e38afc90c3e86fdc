from abc import ABC, abstractmethod
from typing import List, Optional

from string_analyzer.schemas.string_record import StringRecord


class StringStore(ABC):
    """
    Keyed store of analyzed strings, addressed by content hash.

    Implementations must be safe to share between request handlers:
    concurrent inserts of the same id leave exactly one record, and
    get_all never returns a partially written record.
    """

    @abstractmethod
    def insert_if_absent(self, record: StringRecord) -> bool:
        """Store the record; False if a record with the same id already exists"""

    @abstractmethod
    def exists(self, record_id: str) -> bool:
        ...

    @abstractmethod
    def get(self, record_id: str) -> Optional[StringRecord]:
        ...

    @abstractmethod
    def get_all(self) -> List[StringRecord]:
        """All records, oldest first; equal timestamps keep insertion order"""

    @abstractmethod
    def delete(self, record_id: str) -> None:
        """Remove the record; no-op if absent"""
