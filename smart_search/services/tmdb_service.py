# smart_search/services/tmdb_service.py

import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import httpx

from smart_search.core.config import Settings, get_settings
from smart_search.core.exceptions import TMDBServiceError
from smart_search.schemas.movie import MovieSearchResponse

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/500x750?text=No+Image"
REDACTED = "***"


def generate_curl_command(url: str, params: Mapping[str, Any], headers: Mapping[str, str]) -> str:
    """Equivalent cURL line for a GET request, with credentials masked"""
    visible_params = {
        key: (REDACTED if key == "api_key" else value)
        for key, value in params.items()
        if value is not None
    }
    full_url = f"{url}?{urlencode(visible_params)}" if visible_params else url
    curl = f'curl -X GET "{full_url}"'
    for key, value in headers.items():
        if key.lower() == "authorization":
            value = f"Bearer {REDACTED}"
        curl += f' -H "{key}: {value}"'
    return curl


class TMDBService:

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings or get_settings()
        self.timeout = httpx.Timeout(self.settings.tmdb_timeout)
        self._client = client

    def get_image_url(self, path: Optional[str], size: str = "w500") -> str:
        if not path:
            return PLACEHOLDER_IMAGE_URL
        return f"{self.settings.tmdb_image_base_url.rstrip('/')}/{size}{path}"

    def _auth_params(self) -> Dict[str, Any]:
        if self.settings.tmdb_api_key:
            return {"api_key": self.settings.tmdb_api_key}
        return {}

    @staticmethod
    def _serialize(params: Mapping[str, Any]) -> Dict[str, Any]:
        serialized = {}
        for key, value in params.items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            serialized[key] = value
        return serialized

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            message = response.json().get("status_message")
        except (ValueError, AttributeError):
            message = None
        return message or f"TMDB API error: {response.status_code}"

    async def _get(self, path: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        url = f"{self.settings.tmdb_base_url}{path}"
        query = self._serialize({**self._auth_params(), **params})
        headers = self.settings.tmdb_headers
        logger.debug("API Request: %s", generate_curl_command(url, query, headers))

        try:
            if self._client is not None:
                response = await self._client.get(url, params=query, headers=headers)
                response.raise_for_status()
                return response.json()

            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=query, headers=headers)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            message = self._error_message(e.response)
            logger.warning("TMDB request failed (%s %s): %s", e.response.status_code, path, message)
            raise TMDBServiceError(message, status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            logger.warning("TMDB request error (%s): %s", path, e)
            raise TMDBServiceError(f"Request failed: {e}") from e

    async def search_movies(self, query: str, page: int = 1) -> MovieSearchResponse:
        params = {
            "query": query,
            "page": page,
            "include_adult": False,
        }
        data = await self._get("/search/movie", params)
        return MovieSearchResponse.model_validate(data)

    async def get_popular_movies(self, page: int = 1) -> MovieSearchResponse:
        data = await self._get("/movie/popular", {"page": page})
        return MovieSearchResponse.model_validate(data)

    async def discover_movies(self, params: Mapping[str, Any]) -> MovieSearchResponse:
        data = await self._get("/discover/movie", {"include_adult": False, **params})
        return MovieSearchResponse.model_validate(data)

    async def get_movie_details(self, movie_id: int) -> Dict[str, Any]:
        try:
            return await self._get(f"/movie/{movie_id}", {})
        except TMDBServiceError as e:
            if e.status_code == 404:
                raise TMDBServiceError(f"Movie not found (ID: {movie_id})", status_code=404) from e
            raise

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
