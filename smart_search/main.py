# smart_search/main.py

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smart_search.api.v1 import api_router
from smart_search.core.config import Settings, get_settings
from smart_search.core.logger import setup_logging
from smart_search.services.session_manager import SessionManager
from smart_search.services.tmdb_service import TMDBService


def create_app(settings: Optional[Settings] = None, tmdb_service: Optional[TMDBService] = None) -> FastAPI:
    settings = settings or get_settings()
    logger = setup_logging(settings.log_level, debug=settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        service = tmdb_service or TMDBService(
            settings=settings,
            client=httpx.AsyncClient(timeout=httpx.Timeout(settings.tmdb_timeout)),
        )
        app.state.tmdb_service = service
        session_manager = SessionManager(
            service,
            debounce_delay=settings.debounce_delay,
            session_ttl=settings.session_ttl,
        )
        app.state.session_manager = session_manager
        eviction_task = asyncio.create_task(session_manager.run_eviction(settings.session_sweep_interval))
        logger.info("%s started", settings.app_name)

        yield

        # Shutdown
        eviction_task.cancel()
        try:
            await eviction_task
        except asyncio.CancelledError:
            pass
        await app.state.session_manager.close_all()
        await service.aclose()
        logger.info("%s stopped", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        description="Smart movie search router for TMDB",
        version="1.0.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/v1")

    @app.get("/")
    def read_root():
        """Service root"""
        return {
            "service": settings.app_name,
            "version": "1.0.0",
            "docs": "/docs",
        }

    return app


app = create_app()

# uvicorn smart_search.main:app --reload
