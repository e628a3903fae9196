# smart_search/schemas/movie.py

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class MovieSummary(BaseModel):
    """Movie item as returned by TMDB list endpoints"""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB movie ID")
    title: str = Field(default="", description="Title")
    poster_path: Optional[str] = Field(default=None, description="Poster path")
    backdrop_path: Optional[str] = Field(default=None, description="Backdrop path")
    overview: Optional[str] = Field(default=None, description="Overview")
    release_date: Optional[str] = Field(default=None, description="Release date (YYYY-MM-DD)")
    vote_average: float = Field(default=0.0, description="Average rating")
    vote_count: int = Field(default=0, description="Vote count")
    popularity: float = Field(default=0.0, description="Popularity score")
    adult: bool = Field(default=False, description="Adult movie flag")
    genre_ids: List[int] = Field(default_factory=list, description="Genre IDs")
    original_language: Optional[str] = Field(default=None, description="Original language")
    original_title: Optional[str] = Field(default=None, description="Original title")
    video: bool = Field(default=False, description="Video flag")


class MovieSearchResponse(BaseModel):
    """One page of results from search, popular or discover"""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=1, ge=1, description="Page number")
    results: List[MovieSummary] = Field(default_factory=list, description="Movies on this page")
    total_pages: int = Field(default=0, ge=0, description="Total pages")
    total_results: int = Field(default=0, ge=0, description="Total results")
