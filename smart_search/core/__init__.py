# smart_search/core/__init__.py

from .config import get_settings, Settings
from .exceptions import TMDBServiceError
from .logger import setup_logging, LOGGER_NAME

__all__ = [
    "get_settings",
    "Settings",
    "TMDBServiceError",
    "setup_logging",
    "LOGGER_NAME",
]
