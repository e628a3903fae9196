# smart_search/schemas/search.py

from enum import Enum
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from .movie import MovieSummary


class ApiMode(str, Enum):
    popular = "popular"
    search = "search"
    discover = "discover"


class ParsedQuery(BaseModel):
    """Structured filters extracted from free-text input"""

    model_config = ConfigDict(frozen=True)

    text_query: Optional[str] = Field(default=None, description="Remaining title text")
    year: Optional[int] = Field(default=None, description="Primary release year")
    min_rating: Optional[float] = Field(default=None, ge=0, le=10, description="Minimum rating")
    max_rating: Optional[float] = Field(default=None, ge=0, le=10, description="Maximum rating")
    genres: Optional[List[str]] = Field(default=None, description="Genre IDs (string encoded)")
    min_runtime: Optional[int] = Field(default=None, description="Minimum runtime (min)")
    max_runtime: Optional[int] = Field(default=None, description="Maximum runtime (min)")
    use_discover: bool = Field(default=False, description="Route to the discover endpoint")


DiscoverParams = Dict[str, Union[str, int, float]]


class RoutedRequest(BaseModel):
    """Upstream call chosen by the router"""

    mode: ApiMode = Field(description="Endpoint to call")
    params: Dict[str, Any] = Field(default_factory=dict, description="Request parameters")


class ParseResponse(BaseModel):
    query: str = Field(description="Raw input")
    parsed: ParsedQuery = Field(description="Parsed filters")
    api_mode: ApiMode = Field(description="Endpoint the query routes to")
    description: str = Field(description="Human readable description")
    discover_params: Optional[DiscoverParams] = Field(default=None, description="Discover parameters")


class RoutedSearchResponse(BaseModel):
    api_mode: ApiMode = Field(description="Endpoint used")
    description: str = Field(description="Human readable description")
    page: int = Field(description="Page number")
    results: List[MovieSummary] = Field(description="Movies")
    total_pages: int = Field(description="Total pages")
    total_results: int = Field(description="Total results")


class SearchState(BaseModel):
    """Snapshot of a search session for the presentation layer"""

    session_id: Optional[str] = Field(default=None, description="Session ID")
    movies: List[MovieSummary] = Field(default_factory=list, description="Accumulated movies")
    is_loading: bool = Field(default=False, description="Request in flight")
    error: Optional[str] = Field(default=None, description="Last upstream error message")
    error_status_code: Optional[int] = Field(default=None, description="Last upstream error status")
    search_query: str = Field(default="", description="Raw query text")
    has_more: bool = Field(default=False, description="More pages available")
    total_pages: int = Field(default=0, description="Total pages")
    current_page: int = Field(default=1, description="Current page")
    is_searching: bool = Field(default=False, description="Showing search/discover results")
    query_description: str = Field(default="All movies", description="Human readable description")
    api_mode: ApiMode = Field(default=ApiMode.popular, description="Active endpoint")


class SearchQueryUpdate(BaseModel):
    query: str = Field(default="", description="Raw query text")
