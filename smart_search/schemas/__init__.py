# smart_search/schemas/__init__.py

from .movie import MovieSummary, MovieSearchResponse
from .genre import GenreEntry, Genre, GenreListResponse
from .search import (
    ApiMode,
    ParsedQuery,
    DiscoverParams,
    RoutedRequest,
    ParseResponse,
    RoutedSearchResponse,
    SearchState,
    SearchQueryUpdate,
)

__all__ = [
    "MovieSummary",
    "MovieSearchResponse",
    "GenreEntry",
    "Genre",
    "GenreListResponse",
    "ApiMode",
    "ParsedQuery",
    "DiscoverParams",
    "RoutedRequest",
    "ParseResponse",
    "RoutedSearchResponse",
    "SearchState",
    "SearchQueryUpdate",
]
