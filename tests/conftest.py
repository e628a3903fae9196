import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from smart_search.core.config import Settings
from smart_search.schemas.movie import MovieSearchResponse

# Ids per mode are offset so a test can tell which endpoint filled the list.
MODE_OFFSETS = {"popular": 0, "search": 100, "discover": 200}


def make_page(ids: List[int], page: int = 1, total_pages: int = 3) -> Dict[str, Any]:
    return {
        "page": page,
        "results": [{"id": movie_id, "title": f"Movie {movie_id}"} for movie_id in ids],
        "total_pages": total_pages,
        "total_results": total_pages * len(ids),
    }


class FakeTMDBService:
    """Stands in for TMDBService in session tests.

    Page ``n`` of a mode returns ids ``[offset + n, offset + n + 1]`` so
    consecutive pages overlap by one movie. A mode listed in ``gates`` blocks
    until its event is set.
    """

    def __init__(self, total_pages: int = 3):
        self.total_pages = total_pages
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.gates: Dict[str, asyncio.Event] = {}
        self.error: Optional[Exception] = None

    async def _respond(self, mode: str, params: Dict[str, Any]) -> MovieSearchResponse:
        self.calls.append((mode, dict(params)))
        gate = self.gates.get(mode)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        page = params.get("page", 1)
        offset = MODE_OFFSETS[mode]
        return MovieSearchResponse.model_validate(
            make_page([offset + page, offset + page + 1], page=page, total_pages=self.total_pages)
        )

    async def get_popular_movies(self, page: int = 1) -> MovieSearchResponse:
        return await self._respond("popular", {"page": page})

    async def search_movies(self, query: str, page: int = 1) -> MovieSearchResponse:
        return await self._respond("search", {"query": query, "page": page})

    async def discover_movies(self, params) -> MovieSearchResponse:
        return await self._respond("discover", dict(params))

    async def aclose(self) -> None:
        pass


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        tmdb_api_key="test-key",
        tmdb_base_url="https://tmdb.test/3",
        tmdb_image_base_url="https://image.tmdb.test/t/p/",
        debounce_delay_ms=20,
    )


@pytest.fixture
def fake_tmdb():
    return FakeTMDBService()
