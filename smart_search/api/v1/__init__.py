# smart_search/api/v1/__init__.py

from fastapi import APIRouter
from . import search, sessions, movies, genres, system

api_router = APIRouter()

api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(movies.router, prefix="/movies", tags=["movies"])
api_router.include_router(genres.router, prefix="/genres", tags=["genres"])
api_router.include_router(system.router, prefix="/system", tags=["system"])
