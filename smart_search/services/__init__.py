# smart_search/services/__init__.py

from .tmdb_service import TMDBService
from .search_service import SmartSearchSession
from .session_manager import SessionManager
from .debouncer import Debouncer

__all__ = ["TMDBService", "SmartSearchSession", "SessionManager", "Debouncer"]
