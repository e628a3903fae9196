# smart_search/api/v1/genres.py

from fastapi import APIRouter, HTTPException, Path, Query

from smart_search.constants.genres import GENRE_LEXICON
from smart_search.schemas.genre import Genre, GenreEntry, GenreListResponse

router = APIRouter()


def _build_genre_response(entry: GenreEntry) -> Genre:
    return Genre(genre_id=entry.id, name=entry.name, keywords=sorted(entry.keywords))


@router.get(
    "",
    response_model=GenreListResponse,
    summary="All genres",
    description="Lists the genre table used to parse search input.",
)
async def get_all_genres():
    return GenreListResponse(genres=[_build_genre_response(entry) for entry in GENRE_LEXICON])


@router.get(
    "/lookup",
    response_model=Genre,
    summary="Genre lookup",
    description="Resolves a genre name or keyword (case-insensitive) to its genre.",
)
async def lookup_genre(name: str = Query(min_length=1, description="Genre name or keyword")):
    genre_id = GENRE_LEXICON.get_genre_id(name)
    if genre_id is None:
        raise HTTPException(status_code=404, detail=f"Unknown genre: {name}")
    return _build_genre_response(GENRE_LEXICON.get_genre(genre_id))


@router.get(
    "/{genre_id}",
    response_model=Genre,
    summary="Genre by ID",
)
async def get_genre_by_id(genre_id: int = Path(description="Genre ID")):
    entry = GENRE_LEXICON.get_genre(genre_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Genre not found")
    return _build_genre_response(entry)
