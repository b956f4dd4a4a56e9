from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from typing import Optional
import logging

from string_analyzer import schemas
from string_analyzer.errors import ErrorKind, Result
from string_analyzer.service import StringAnalyzerService

router = APIRouter()
logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.BAD_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONTRADICTION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.PERSISTENCE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_service(request: Request) -> StringAnalyzerService:
    """Dependency to provide the string service created at startup."""
    return request.app.state.service


def unwrap(result: Result):
    """Return the result value or raise the matching HTTPException."""
    if result.ok:
        return result.value
    raise HTTPException(
        status_code=STATUS_BY_KIND[result.error.kind],
        detail={"error": result.error.message},
    )


@router.post("/strings", response_model=schemas.StringResponse, status_code=status.HTTP_201_CREATED)
async def create_string(
    string_data: schemas.StringCreate,
    service: StringAnalyzerService = Depends(get_service),
):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    return unwrap(service.upload(string_data.value))


@router.get("/strings/all", response_model=schemas.StringListResponse)
async def get_all_strings(service: StringAnalyzerService = Depends(get_service)):
    """Every stored string in insertion order."""
    return unwrap(service.get_all())


@router.get("/strings/filter-by-natural-language", response_model=schemas.NaturalLanguageResponse)
async def filter_by_natural_language(
    query: str = Query(..., description="Natural language query"),
    service: StringAnalyzerService = Depends(get_service),
):
    """
    Filter strings using one of the supported phrases.
    Example: "all single word palindromic strings"
    """
    return unwrap(service.get_by_phrase(query))


@router.get("/strings")
async def search_strings(
    value: Optional[str] = Query(None, description="Exact string to look up"),
    is_palindrome: Optional[bool] = Query(None),
    min_length: Optional[int] = Query(None),
    max_length: Optional[int] = Query(None),
    word_count: Optional[int] = Query(None),
    contains_character: Optional[str] = Query(None),
    service: StringAnalyzerService = Depends(get_service),
):
    """
    Look up one string by ``value``, filter by properties, or list everything.
    """
    if value is not None:
        return unwrap(service.get_by_value(value)).model_dump()

    filters = {
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    }
    filters = {key: val for key, val in filters.items() if val is not None}

    if filters:
        listing = unwrap(service.get_by_filter(filters))
    else:
        listing = unwrap(service.get_all())
    return listing.model_dump(exclude_none=True)


@router.get("/strings/{string_value}", response_model=schemas.StringResponse)
async def get_string(
    string_value: str,
    service: StringAnalyzerService = Depends(get_service),
):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    return unwrap(service.get_by_value(string_value))


@router.delete("/strings/{string_value}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_string(
    string_value: str,
    service: StringAnalyzerService = Depends(get_service),
):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    unwrap(service.delete_by_value(string_value))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
