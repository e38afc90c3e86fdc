from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime


class StringCreate(BaseModel):
    value: StrictStr = Field(..., description="String to analyze")

    @field_validator('value')
    @classmethod
    def validate_value(cls, v):
        """Reject strings that cannot be stored or returned as UTF-8 (lone surrogates)"""
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("Value must be valid Unicode text")
        return v


class StringProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    value: str
    properties: StringProperties
    created_at: datetime


class FilterCriteria(BaseModel):
    """Independently optional predicates, combined with AND. None means no constraint."""

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class TranslationResult(BaseModel):
    success: bool = False
    # Reserved for mutually exclusive signals; nothing sets it yet
    conflicting: bool = False
    criteria: FilterCriteria = Field(default_factory=FilterCriteria)


class StringListResponse(BaseModel):
    data: List[StringRecord]
    count: int
    filters_applied: Dict[str, Any]


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringRecord]
    count: int
    interpreted_query: InterpretedQuery
