# smart_search/core/exceptions.py

from typing import Optional


class TMDBServiceError(Exception):
    """Upstream TMDB failure, surfaced to callers unchanged.

    ``status_code`` is the HTTP status for error responses and ``None`` for
    transport failures (timeouts, refused connections).
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"TMDBServiceError(status_code={self.status_code!r}, message={self.message!r})"
