# smart_search/schemas/genre.py

from typing import FrozenSet, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


class GenreEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(description="TMDB genre ID")
    name: str = Field(description="Canonical genre name")
    keywords: FrozenSet[str] = Field(default_factory=frozenset, description="Lowercase keyword synonyms")

    @field_validator("keywords", mode="before")
    @classmethod
    def _lowercase_keywords(cls, value):
        return frozenset(keyword.lower() for keyword in value)


class Genre(BaseModel):
    genre_id: int = Field(description="Genre ID")
    name: str = Field(description="Genre name")
    keywords: List[str] = Field(default_factory=list, description="Keyword synonyms")


class GenreListResponse(BaseModel):
    genres: List[Genre] = Field(description="Genre list")
