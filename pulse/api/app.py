# ==============================================================================
# HTTP Application Factory
# ==============================================================================
"""
FastAPI application wiring the routes to an event store.

Run with:
    pulse serve
    uvicorn pulse.api.app:create_app --factory
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pulse.api.routes import router
from pulse.base import EventStore
from pulse.infrastructure.stores import FallbackEventStore, get_event_store
from pulse.services import EventIngestor, StatsService
from pulse.utils.config import Settings, get_settings
from pulse.utils.versions import get_pulse_version

logger = logging.getLogger(__name__)


def create_app(store: EventStore | None = None, settings: Settings | None = None) -> FastAPI:
    """
    Build the API application.

    Args:
        store: Event store to use. If None, uses the process-wide store.
        settings: Application settings. If None, uses get_settings().

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    if store is None:
        store = get_event_store()
    if not isinstance(store, FallbackEventStore):
        store = FallbackEventStore([store])

    app = FastAPI(title="Pulse Analytics API", version=get_pulse_version())

    # '*' echoes the caller's origin so credentialed requests are accepted
    origins = settings.api.allow_origins
    cors_origins = {"allow_origin_regex": ".*"} if "*" in origins else {"allow_origins": origins}
    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        **cors_origins,
    )

    app.state.store = store
    app.state.ingestor = EventIngestor(store)
    app.state.stats = StatsService(store, settings.session)
    app.include_router(router)

    logger.info("Pulse API ready (store=%s)", store.name)
    return app
