# smart_search/services/session_manager.py

import asyncio
import logging
import time
from typing import Callable, Dict, List, Optional

from smart_search.services.search_service import SmartSearchSession
from smart_search.services.tmdb_service import TMDBService

logger = logging.getLogger(__name__)


class SessionManager:
    """In-memory registry of search sessions, one per search surface.

    A session nobody has looked up for ``session_ttl`` seconds counts as
    abandoned and is closed by the next ``evict_idle`` sweep.
    """

    def __init__(
        self,
        tmdb_service: TMDBService,
        debounce_delay: Optional[float] = None,
        session_ttl: float = 1800.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.tmdb_service = tmdb_service
        self.debounce_delay = debounce_delay
        self.session_ttl = session_ttl
        self._clock = clock
        self._sessions: Dict[str, SmartSearchSession] = {}
        self._last_seen: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create_session(self) -> SmartSearchSession:
        session = SmartSearchSession(self.tmdb_service, debounce_delay=self.debounce_delay)
        self._sessions[session.session_id] = session
        self._last_seen[session.session_id] = self._clock()
        session.start()
        logger.info("Search session created: %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> Optional[SmartSearchSession]:
        session = self._sessions.get(session_id)
        if session is not None:
            self._last_seen[session_id] = self._clock()
        return session

    async def close_session(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        self._last_seen.pop(session_id, None)
        if session is None:
            return False
        await session.close()
        logger.info("Search session closed: %s", session_id)
        return True

    async def evict_idle(self) -> List[str]:
        """Close every session idle for longer than ``session_ttl``"""
        cutoff = self._clock() - self.session_ttl
        expired = [session_id for session_id, seen in self._last_seen.items() if seen < cutoff]
        for session_id in expired:
            await self.close_session(session_id)
        if expired:
            logger.info("Evicted %d idle search session(s)", len(expired))
        return expired

    async def run_eviction(self, interval: float) -> None:
        """Sweep idle sessions every ``interval`` seconds until cancelled"""
        while True:
            await asyncio.sleep(interval)
            try:
                await self.evict_idle()
            except Exception:
                logger.exception("Idle session sweep failed")

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            await self.close_session(session_id)
