# ==============================================================================
# HTTP Routes
# ==============================================================================
"""
Collection, query and clear endpoints.

    POST /api/track                           record one event
    GET  /api/stats                           raw stored events
    GET  /api/stats?aggregate=true            session report
    GET  /api/stats?aggregate=true&breakdowns=true
    POST /api/clear                           empty every store backend

A store failure is a 503 with a message body, never a zero report, so the
dashboard can show "backend error" and "no data yet" differently.
"""

import json
import logging
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from pulse.base import IngestionError, StoreUnavailableError
from pulse.services import EventIngestor, StatsService, resolve_client_ip

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

TRUTHY = ("true", "1")


def _flag(value: Optional[str]) -> bool:
    return value is not None and value.lower() in TRUTHY


@router.post("/track", status_code=201)
async def track(request: Request):
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(status_code=400, content={"message": "Missing required fields"})

    client_ip = resolve_client_ip(
        request.headers.get("x-forwarded-for"),
        request.client.host if request.client else None,
    )
    logger.info(
        "Track incoming origin=%s page=%s",
        request.headers.get("origin", ""),
        payload.get("page") if isinstance(payload, dict) else None,
    )

    ingestor: EventIngestor = request.app.state.ingestor
    try:
        await run_in_threadpool(ingestor.ingest, payload, client_ip)
    except IngestionError as e:
        return JSONResponse(status_code=400, content={"message": str(e)})
    except StoreUnavailableError as e:
        logger.error("Tracking error: %s", e)
        return JSONResponse(status_code=503, content={"message": "Failed to store event"})

    return {"message": "Tracked successfully"}


@router.get("/stats")
def stats(
    request: Request,
    aggregate: Optional[str] = Query(None, description="'true' or '1' for the session report"),
    breakdowns: Optional[str] = Query(None, description="'true' or '1' to add breakdowns"),
):
    service: StatsService = request.app.state.stats
    try:
        if _flag(aggregate):
            return service.report(include_breakdowns=_flag(breakdowns))
        return service.events()
    except StoreUnavailableError as e:
        logger.error("Error reading stats: %s", e)
        return JSONResponse(status_code=503, content={"message": "Failed to retrieve stats"})


@router.post("/clear")
def clear(request: Request):
    service: StatsService = request.app.state.stats
    results = service.clear()
    cleared = [name for name, ok in results.items() if ok]
    if not cleared:
        return JSONResponse(
            status_code=503,
            content={"ok": False, "message": "Failed to clear data", "cleared": []},
        )
    return {"ok": True, "cleared": cleared}
