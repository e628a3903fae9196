# smart_search/services/search_service.py

import asyncio
import logging
import uuid
from typing import List, Optional, Set

from smart_search.core.config import get_settings
from smart_search.core.exceptions import TMDBServiceError
from smart_search.schemas.movie import MovieSummary
from smart_search.schemas.search import ApiMode, ParsedQuery, RoutedRequest, SearchState
from smart_search.services.accumulator import apply_page, has_more
from smart_search.services.debouncer import Debouncer
from smart_search.services.router import build_request, execute_request, resolve_api_mode
from smart_search.services.tmdb_service import TMDBService
from smart_search.utils.query_parser import get_query_description, parse_search_query

logger = logging.getLogger(__name__)


class SmartSearchSession:
    """Search state for one search surface.

    Keystrokes go through a debouncer; once the text settles it is parsed,
    routed to popular, search or discover, and pages are accumulated into a
    de-duplicated movie list.

    Every query or mode transition, refresh and clear bumps ``version``. A
    fetch remembers the version it was dispatched under and its result is
    dropped on arrival if the version has moved on.
    """

    def __init__(
        self,
        tmdb_service: TMDBService,
        debounce_delay: Optional[float] = None,
        session_id: Optional[str] = None,
    ):
        if debounce_delay is None:
            debounce_delay = get_settings().debounce_delay

        self.session_id = session_id or uuid.uuid4().hex
        self.tmdb_service = tmdb_service

        self.search_query = ""
        self.debounced_query = ""
        self.parsed: ParsedQuery = parse_search_query("")
        self.api_mode = ApiMode.popular
        self.page = 1
        self.movies: List[MovieSummary] = []
        self.total_pages = 0
        self.is_loading = False
        self.error: Optional[Exception] = None
        self.version = 0
        self._applied_page = 0

        self._tasks: Set[asyncio.Task] = set()
        self._debouncer: Debouncer[str] = Debouncer("", delay=debounce_delay, on_change=self._on_debounced)

    @property
    def has_more(self) -> bool:
        return has_more(self.page, self.total_pages)

    @property
    def is_searching(self) -> bool:
        return self.api_mode != ApiMode.popular

    @property
    def query_description(self) -> str:
        return get_query_description(self.parsed)

    def start(self) -> None:
        """Issue the initial popular listing fetch"""
        self._reset_and_fetch()

    def set_search_query(self, query: str) -> None:
        self.search_query = query
        self._debouncer.set(query)

    def clear_search(self) -> None:
        self._debouncer.cancel()
        self.search_query = ""
        self._apply_query("")
        self._reset_and_fetch()

    def load_more(self) -> bool:
        """Fetch the next page. No-op while loading or past the last page.

        After a failed page fetch the same page is requested again, so no
        page is ever skipped.
        """
        if self.is_loading:
            return False
        if self.error is not None and self.page > self._applied_page:
            self._dispatch()
            return True
        if not self.has_more:
            return False
        self.page += 1
        self._dispatch()
        return True

    def refresh(self) -> None:
        """Start over from page 1, ignoring anything still in flight"""
        self._reset_and_fetch()

    def retry(self) -> bool:
        """Re-issue the request that last failed"""
        if self.error is None or self.is_loading:
            return False
        self._dispatch()
        return True

    def state(self) -> SearchState:
        error = self.error
        return SearchState(
            session_id=self.session_id,
            movies=list(self.movies),
            is_loading=self.is_loading,
            error=str(error) if error is not None else None,
            error_status_code=getattr(error, "status_code", None),
            search_query=self.search_query,
            has_more=self.has_more,
            total_pages=self.total_pages,
            current_page=self.page,
            is_searching=self.is_searching,
            query_description=self.query_description,
            api_mode=self.api_mode,
        )

    async def wait_idle(self) -> None:
        pending = [task for task in self._tasks if not task.done()]
        while pending:
            await asyncio.gather(*pending, return_exceptions=True)
            pending = [task for task in self._tasks if not task.done()]

    async def close(self) -> None:
        self._debouncer.cancel()
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)
        self._tasks.clear()

    def _on_debounced(self, query: str) -> None:
        previous = (self.debounced_query, self.api_mode)
        self._apply_query(query)
        if (self.debounced_query, self.api_mode) == previous:
            return
        logger.info("Smart search mode: %s | %s", self.api_mode.value.upper(), self.query_description)
        self._reset_and_fetch()

    def _apply_query(self, query: str) -> None:
        self.debounced_query = query
        self.parsed = parse_search_query(query)
        self.api_mode = resolve_api_mode(query, self.parsed)

    def _reset_and_fetch(self) -> None:
        self.version += 1
        self.page = 1
        self.movies = []
        self.total_pages = 0
        self._applied_page = 0
        self._dispatch()

    def _dispatch(self) -> None:
        request = build_request(self.api_mode, self.debounced_query, self.parsed, self.page)
        self.is_loading = True
        self.error = None
        task = asyncio.get_running_loop().create_task(self._fetch(request, self.version, self.page))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(self, request: RoutedRequest, version: int, page: int) -> None:
        try:
            response = await execute_request(self.tmdb_service, request)
        except TMDBServiceError as e:
            self._fail(e, version)
            return
        except Exception as e:
            logger.exception("Unexpected error while fetching %s page %s", request.mode.value, page)
            self._fail(e, version)
            return

        if version != self.version:
            logger.debug("Discarding stale %s response (version %s, current %s)", request.mode.value, version, self.version)
            return

        self.movies = apply_page(self.movies, response, is_first_page=page == 1)
        self.total_pages = response.total_pages
        self._applied_page = page
        self.is_loading = False

    def _fail(self, error: Exception, version: int) -> None:
        if version != self.version:
            logger.debug("Discarding stale error (version %s, current %s): %s", version, self.version, error)
            return
        self.error = error
        self.is_loading = False
