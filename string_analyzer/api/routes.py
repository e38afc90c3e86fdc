from fastapi import APIRouter, HTTPException, Query, Response, status
from typing import Optional
from urllib.parse import quote
import logging

from string_analyzer.api.deps import StoreDep
from string_analyzer.schemas.string_record import (
    FilterCriteria,
    InterpretedQuery,
    NaturalLanguageResponse,
    StringCreate,
    StringListResponse,
    StringRecord,
)
from string_analyzer.services.analyzer import build_record, compute_sha256
from string_analyzer.services.filters import evaluate, validate_criteria
from string_analyzer.services.nl_parser import translate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/strings", response_model=StringRecord, status_code=status.HTTP_201_CREATED)
def create_string(string_data: StringCreate, response: Response, store: StoreDep):
    """
    Analyze and store a string.
    Returns 409 if the string already exists.
    """
    record = build_record(string_data.value)

    if not store.insert_if_absent(record):
        logger.info(f"Duplicate string rejected: {record.id}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"error": "String already exists in the system", "id": record.id},
        )

    logger.info(f"Stored string analysis {record.id}")
    response.headers["Location"] = f"/strings/{quote(record.value, safe='')}"
    return record


@router.get("/strings", response_model=StringListResponse)
def get_all_strings(
    store: StoreDep,
    is_palindrome: Optional[bool] = Query(None, description="Filter by palindrome (true/false)"),
    min_length: Optional[int] = Query(None, description="Minimum string length"),
    max_length: Optional[int] = Query(None, description="Maximum string length"),
    word_count: Optional[int] = Query(None, description="Exact word count"),
    contains_character: Optional[str] = Query(None, description="Single character the string must contain"),
):
    """
    Get all strings with optional filtering.
    """
    criteria = FilterCriteria(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )

    problems = validate_criteria(criteria)
    if problems:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid query parameter values or types", "details": problems},
        )

    data = evaluate(store.get_all(), criteria)
    return StringListResponse(
        data=data,
        count=len(data),
        filters_applied=criteria.model_dump(exclude_none=True),
    )


@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    store: StoreDep,
    query: str = Query(..., description="Natural language query, e.g. 'all single word palindromic strings'"),
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    if not query.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Query parameter is required"},
        )

    result = translate(query)
    interpreted = InterpretedQuery(
        original=query,
        parsed_filters=result.criteria.model_dump(exclude_none=True),
    )

    if not result.success:
        logger.info(f"Unable to parse natural language query: {query!r}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Unable to parse natural language query",
                "interpreted_query": interpreted.model_dump(),
            },
        )

    if result.conflicting:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error": "Query parsed but resulted in conflicting filters",
                "interpreted_query": interpreted.model_dump(),
            },
        )

    data = evaluate(store.get_all(), result.criteria)
    return NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=interpreted,
    )


@router.get("/strings/{string_value:path}", response_model=StringRecord)
def get_string(string_value: str, store: StoreDep):
    """
    Get analysis for a specific string.
    Returns 404 if the string doesn't exist.
    """
    record = store.get(compute_sha256(string_value))
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "String does not exist in the system"},
        )
    return record


@router.delete("/strings/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, store: StoreDep):
    """
    Delete a string from the system.
    Returns 404 if the string doesn't exist.
    """
    record_id = compute_sha256(string_value)
    if not store.exists(record_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "String does not exist in the system"},
        )

    store.delete(record_id)
    logger.info(f"Deleted string {record_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
