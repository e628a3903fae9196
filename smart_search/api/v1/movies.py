# smart_search/api/v1/movies.py

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Path, status

from smart_search.core.dependencies import get_tmdb_service
from smart_search.core.exceptions import TMDBServiceError
from smart_search.services.tmdb_service import TMDBService

router = APIRouter()


@router.get(
    "/{movie_id}",
    response_model=Dict[str, Any],
    summary="Movie details",
    description="Full TMDB record for one movie, with poster and backdrop URLs resolved.",
)
async def get_movie_details(
    movie_id: int = Path(description="TMDB movie ID"),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
):
    try:
        movie = await tmdb_service.get_movie_details(movie_id)
    except TMDBServiceError as e:
        if e.status_code == status.HTTP_404_NOT_FOUND:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"TMDB request failed: {e}")

    movie["poster_url"] = tmdb_service.get_image_url(movie.get("poster_path"))
    movie["backdrop_url"] = tmdb_service.get_image_url(movie.get("backdrop_path"), size="original")
    return movie
