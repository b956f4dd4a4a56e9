from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union


class StringCreate(BaseModel):
    value: str = Field(..., description="String to analyze")


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    """A stored, analyzed string. This is also the on-disk record shape."""

    id: str
    value: str
    properties: StringProperties
    created_at: str

    model_config = ConfigDict(from_attributes=True)


class FilterSpec(BaseModel):
    """Exact-match and range filters; every field that is set must match."""

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    word_count: Optional[int] = Field(None, ge=0)
    # Substring containment, not a single-character check
    contains_character: Optional[str] = Field(None, min_length=1)

    model_config = ConfigDict(extra="forbid")

    def applied(self) -> Dict[str, Any]:
        """Only the filters that were actually set."""
        return self.model_dump(exclude_none=True)


class PartialFilterSpec(FilterSpec):
    """Filter produced by a phrase lookup.

    ``contains`` is ``[term, occurrence_hint]``. The term ``"vowel"`` means the
    value must start with a vowel; any other term is a substring to look for.
    """

    contains: Optional[List[Union[str, int]]] = Field(None, min_length=2, max_length=2)


class PhraseEntry(BaseModel):
    query: str
    filter: PartialFilterSpec


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Optional[Dict[str, Any]] = None


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery
