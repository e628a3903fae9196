# smart_search/api/v1/system.py

from fastapi import APIRouter, Depends

from smart_search.core.dependencies import get_session_manager
from smart_search.services.session_manager import SessionManager

router = APIRouter()


@router.get("/health")
def health_check(session_manager: SessionManager = Depends(get_session_manager)):
    """Service health check"""
    return {"status": "healthy", "service": "smart-search", "sessions": len(session_manager)}
