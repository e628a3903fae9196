# smart_search/api/v1/search.py

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from smart_search.core.dependencies import get_tmdb_service
from smart_search.core.exceptions import TMDBServiceError
from smart_search.schemas.search import ApiMode, ParseResponse, RoutedSearchResponse
from smart_search.services.router import build_request, execute_request, resolve_api_mode
from smart_search.services.tmdb_service import TMDBService
from smart_search.utils.query_parser import get_query_description, parse_search_query, to_discover_params

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/parse",
    response_model=ParseResponse,
    summary="Parse a search query",
    description="Shows the filters, endpoint and Discover parameters a query maps to without calling TMDB.",
)
async def parse_query(query: str = Query(default="", description="Search input")):
    parsed = parse_search_query(query)
    api_mode = resolve_api_mode(query, parsed)
    return ParseResponse(
        query=query,
        parsed=parsed,
        api_mode=api_mode,
        description=get_query_description(parsed),
        discover_params=to_discover_params(parsed) if api_mode == ApiMode.discover else None,
    )


@router.get(
    "",
    response_model=RoutedSearchResponse,
    summary="Smart search",
    description="Routes the query to popular, search or discover and returns one page of results.",
)
async def smart_search(
    query: str = Query(default="", description="Search input"),
    page: int = Query(default=1, ge=1, le=500, description="Page number"),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
):
    parsed = parse_search_query(query)
    api_mode = resolve_api_mode(query, parsed)
    request = build_request(api_mode, query, parsed, page)

    try:
        response = await execute_request(tmdb_service, request)
    except TMDBServiceError as e:
        logger.warning("Smart search failed (%s): %s", api_mode.value, e)
        raise HTTPException(status_code=502, detail=f"TMDB request failed: {e}")

    return RoutedSearchResponse(
        api_mode=api_mode,
        description=get_query_description(parsed),
        page=response.page,
        results=response.results,
        total_pages=response.total_pages,
        total_results=response.total_results,
    )
