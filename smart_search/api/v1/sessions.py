# smart_search/api/v1/sessions.py

from fastapi import APIRouter, Depends, Response, status

from smart_search.core.dependencies import get_search_session, get_session_manager
from smart_search.schemas.search import SearchQueryUpdate, SearchState
from smart_search.services.search_service import SmartSearchSession
from smart_search.services.session_manager import SessionManager

router = APIRouter()


@router.post(
    "",
    response_model=SearchState,
    status_code=status.HTTP_201_CREATED,
    summary="Open a search session",
    description="Creates a session and starts loading popular movies.",
)
async def create_session(session_manager: SessionManager = Depends(get_session_manager)):
    session = session_manager.create_session()
    return session.state()


@router.get(
    "/{session_id}",
    response_model=SearchState,
    summary="Session state",
    description="Current movies, loading/error flags and pagination. Pass wait=true to block until idle.",
)
async def get_session_state(
    wait: bool = False,
    session: SmartSearchSession = Depends(get_search_session),
):
    if wait:
        await session.wait_idle()
    return session.state()


@router.put(
    "/{session_id}/query",
    response_model=SearchState,
    summary="Update the search text",
    description="Feeds raw input to the session; routing happens once the text settles.",
)
async def set_search_query(
    body: SearchQueryUpdate,
    session: SmartSearchSession = Depends(get_search_session),
):
    session.set_search_query(body.query)
    return session.state()


@router.post("/{session_id}/load-more", response_model=SearchState, summary="Load the next page")
async def load_more(session: SmartSearchSession = Depends(get_search_session)):
    session.load_more()
    return session.state()


@router.post("/{session_id}/refresh", response_model=SearchState, summary="Reload from page 1")
async def refresh(session: SmartSearchSession = Depends(get_search_session)):
    session.refresh()
    return session.state()


@router.post("/{session_id}/retry", response_model=SearchState, summary="Retry the failed request")
async def retry(session: SmartSearchSession = Depends(get_search_session)):
    session.retry()
    return session.state()


@router.post("/{session_id}/clear", response_model=SearchState, summary="Clear search and show popular movies")
async def clear_search(session: SmartSearchSession = Depends(get_search_session)):
    session.clear_search()
    return session.state()


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Close a search session")
async def close_session(
    session: SmartSearchSession = Depends(get_search_session),
    session_manager: SessionManager = Depends(get_session_manager),
):
    await session_manager.close_session(session.session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
