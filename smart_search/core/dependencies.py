# smart_search/core/dependencies.py

from fastapi import HTTPException, Path, Request, status

from smart_search.services.search_service import SmartSearchSession
from smart_search.services.session_manager import SessionManager
from smart_search.services.tmdb_service import TMDBService


def get_tmdb_service(request: Request) -> TMDBService:
    return request.app.state.tmdb_service


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_search_session(
    request: Request,
    session_id: str = Path(description="Search session ID"),
) -> SmartSearchSession:
    """Resolve a session id or fail with 404"""
    session = get_session_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Search session not found (ID: {session_id})",
        )
    return session
