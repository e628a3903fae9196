# smart_search/utils/__init__.py

from .query_parser import (
    parse_search_query,
    to_discover_params,
    get_query_description,
    MIN_VOTE_COUNT,
)

__all__ = [
    "parse_search_query",
    "to_discover_params",
    "get_query_description",
    "MIN_VOTE_COUNT",
]
