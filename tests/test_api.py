import time

import httpx
import pytest
from fastapi.testclient import TestClient

from smart_search.main import create_app
from smart_search.services.tmdb_service import PLACEHOLDER_IMAGE_URL, TMDBService

from conftest import make_page


class UpstreamRecorder:
    """MockTransport handler for the TMDB list and movie details endpoints"""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.missing = set()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"status_message": "Invalid API key"})
        if request.url.path.startswith("/3/movie/") and request.url.path != "/3/movie/popular":
            movie_id = int(request.url.path.rsplit("/", 1)[1])
            if movie_id in self.missing:
                return httpx.Response(404, json={"status_message": "The resource you requested could not be found."})
            return httpx.Response(200, json={"id": movie_id, "title": f"Movie {movie_id}", "poster_path": "/p.jpg", "backdrop_path": None})
        page = int(request.url.params.get("page", 1))
        offset = {"/3/movie/popular": 0, "/3/search/movie": 100, "/3/discover/movie": 200}[request.url.path]
        return httpx.Response(200, json=make_page([offset + page, offset + page + 1], page=page, total_pages=2))

    @property
    def paths(self):
        return [request.url.path for request in self.requests]


@pytest.fixture
def upstream():
    return UpstreamRecorder()


@pytest.fixture
def client(settings, upstream):
    service = TMDBService(settings=settings, client=httpx.AsyncClient(transport=httpx.MockTransport(upstream)))
    app = create_app(settings=settings, tmdb_service=service)
    with TestClient(app) as c:
        yield c


def _ids(payload):
    return [movie["id"] for movie in payload["movies"]]


def test_health_check(client):
    response = client.get("/v1/system/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_list_genres(client):
    response = client.get("/v1/genres")
    assert response.status_code == 200
    genres = response.json()["genres"]
    assert len(genres) == 19
    assert genres[0]["genre_id"] == 28
    assert genres[0]["name"] == "Action"


def test_genre_by_id_and_lookup(client):
    assert client.get("/v1/genres/27").json()["name"] == "Horror"
    assert client.get("/v1/genres/lookup", params={"name": "Zombie"}).json()["genre_id"] == 27
    assert client.get("/v1/genres/1").status_code == 404
    assert client.get("/v1/genres/lookup", params={"name": "opera"}).status_code == 404


def test_parse_endpoint_does_not_call_upstream(client, upstream):
    response = client.get("/v1/search/parse", params={"query": "action 2020 rating>7"})
    assert response.status_code == 200
    data = response.json()
    assert data["api_mode"] == "discover"
    assert data["parsed"]["year"] == 2020
    assert data["parsed"]["genres"] == ["28"]
    assert data["description"] == "from 2020, genre: 28, rating ≥ 7"
    assert data["discover_params"]["vote_count.gte"] == 100
    assert upstream.requests == []


def test_parse_endpoint_plain_title(client):
    data = client.get("/v1/search/parse", params={"query": "inception"}).json()
    assert data["api_mode"] == "search"
    assert data["discover_params"] is None


@pytest.mark.parametrize(
    "query, mode, path",
    [
        ("", "popular", "/3/movie/popular"),
        ("inception", "search", "/3/search/movie"),
        ("horror 1980", "discover", "/3/discover/movie"),
    ],
)
def test_smart_search_routes_to_one_endpoint(client, upstream, query, mode, path):
    response = client.get("/v1/search", params={"query": query})
    assert response.status_code == 200
    assert response.json()["api_mode"] == mode
    assert upstream.paths == [path]


def test_smart_search_upstream_failure(client, upstream):
    upstream.status_code = 401
    response = client.get("/v1/search", params={"query": "inception"})
    assert response.status_code == 502
    assert "Invalid API key" in response.json()["detail"]


def test_session_lifecycle(client, upstream):
    created = client.post("/v1/sessions")
    assert created.status_code == 201
    session_id = created.json()["session_id"]

    state = client.get(f"/v1/sessions/{session_id}", params={"wait": True}).json()
    assert state["api_mode"] == "popular"
    assert _ids(state) == [1, 2]
    assert state["has_more"] is True

    state = client.post(f"/v1/sessions/{session_id}/load-more").json()
    assert state["current_page"] == 2
    state = client.get(f"/v1/sessions/{session_id}", params={"wait": True}).json()
    assert _ids(state) == [1, 2, 3]
    assert state["has_more"] is False

    client.put(f"/v1/sessions/{session_id}/query", json={"query": "action 2020 rating>7"})
    time.sleep(0.2)
    state = client.get(f"/v1/sessions/{session_id}", params={"wait": True}).json()
    assert state["api_mode"] == "discover"
    assert state["current_page"] == 1
    assert _ids(state) == [201, 202]
    assert state["query_description"] == "from 2020, genre: 28, rating ≥ 7"

    state = client.post(f"/v1/sessions/{session_id}/clear").json()
    assert state["search_query"] == ""
    assert state["api_mode"] == "popular"

    assert client.delete(f"/v1/sessions/{session_id}").status_code == 204
    assert client.get(f"/v1/sessions/{session_id}").status_code == 404


def test_session_error_and_refresh(client, upstream):
    upstream.status_code = 401
    session_id = client.post("/v1/sessions").json()["session_id"]

    state = client.get(f"/v1/sessions/{session_id}", params={"wait": True}).json()
    assert state["error"] == "Invalid API key"
    assert state["error_status_code"] == 401
    assert state["movies"] == []

    upstream.status_code = 200
    client.post(f"/v1/sessions/{session_id}/refresh")
    state = client.get(f"/v1/sessions/{session_id}", params={"wait": True}).json()
    assert state["error"] is None
    assert _ids(state) == [1, 2]


def test_unknown_session_is_404(client):
    assert client.get("/v1/sessions/missing").status_code == 404
    assert client.post("/v1/sessions/missing/load-more").status_code == 404


def test_movie_details_with_image_urls(client, upstream):
    response = client.get("/v1/movies/42")
    assert response.status_code == 200
    movie = response.json()
    assert movie["id"] == 42
    assert movie["poster_url"] == "https://image.tmdb.test/t/p/w500/p.jpg"
    assert movie["backdrop_url"] == PLACEHOLDER_IMAGE_URL
    assert upstream.paths == ["/3/movie/42"]


def test_movie_details_not_found(client, upstream):
    upstream.missing.add(7)
    response = client.get("/v1/movies/7")
    assert response.status_code == 404
    assert response.json()["detail"] == "Movie not found (ID: 7)"


def test_movie_details_upstream_failure(client, upstream):
    upstream.status_code = 500
    assert client.get("/v1/movies/42").status_code == 502
