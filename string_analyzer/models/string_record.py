from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from string_analyzer.database import Base


class StringRecordRow(Base):
    __tablename__ = "string_records"

    # Surrogate key keeps insertion order for records created in the same instant
    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False, index=True)  # SHA-256 hash
    value = Column(Text, nullable=False)
    length = Column(Integer, nullable=False)
    is_palindrome = Column(Boolean, nullable=False)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False)
    sha256_hash = Column(String(64), nullable=False)
    character_frequency_map = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
