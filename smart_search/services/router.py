# smart_search/services/router.py

from typing import TYPE_CHECKING

from smart_search.schemas.movie import MovieSearchResponse
from smart_search.schemas.search import ApiMode, ParsedQuery, RoutedRequest
from smart_search.utils.query_parser import to_discover_params

if TYPE_CHECKING:
    from smart_search.services.tmdb_service import TMDBService


def resolve_api_mode(debounced_query: str, parsed: ParsedQuery) -> ApiMode:
    """Pick the endpoint for a query.

    Blank input lists popular movies, structured filters go to discover and
    anything else is a plain title search.
    """
    if not debounced_query or not debounced_query.strip():
        return ApiMode.popular
    if parsed.use_discover:
        return ApiMode.discover
    return ApiMode.search


def build_request(mode: ApiMode, debounced_query: str, parsed: ParsedQuery, page: int = 1) -> RoutedRequest:
    if mode == ApiMode.popular:
        return RoutedRequest(mode=mode, params={"page": page})
    if mode == ApiMode.search:
        return RoutedRequest(mode=mode, params={"query": parsed.text_query or debounced_query, "page": page})
    return RoutedRequest(mode=mode, params={**to_discover_params(parsed), "page": page})


async def execute_request(tmdb_service: "TMDBService", request: RoutedRequest) -> MovieSearchResponse:
    """Run only the upstream call that belongs to the request's mode"""
    params = request.params
    if request.mode == ApiMode.popular:
        return await tmdb_service.get_popular_movies(page=params["page"])
    if request.mode == ApiMode.search:
        return await tmdb_service.search_movies(query=params["query"], page=params["page"])
    return await tmdb_service.discover_movies(params)
