"""
API Routes — Endpoint Definitions

All handlers are async. The event log is owned by the application
(app.state.event_log) and injected per request.

- POST   /          — Record a blocked URL
- GET    /          — All blocked URLs, newest first (?latest=true for newest only)
- GET    /ping      — Health check
- DELETE /cleanup   — Clear all blocked URLs
"""

from typing import Optional, Union

from fastapi import APIRouter, Body, Depends, Query, Request, status

from listener.store import EventLog

from .schemas import (
    CleanupResponse,
    ErrorResponse,
    LatestResponse,
    PingResponse,
    ReportRequest,
    ReportResponse,
    RequestsResponse,
)
from .services import build_ping, record_blocked_url


router = APIRouter()


# Dependency for the event log
def get_event_log(request: Request) -> EventLog:
    """Event log created by the app factory for this application instance."""
    return request.app.state.event_log


@router.post(
    "/",
    response_model=ReportResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "blockedUrl or reportedAt missing"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Record a blocked URL",
)
async def report_blocked_url(
    payload: Optional[ReportRequest] = Body(default=None),
    log: EventLog = Depends(get_event_log),
) -> ReportResponse:
    """
    Store one blocked-URL event at the front of the log.

    - Rejects payloads without blockedUrl, blockedUrl.url or reportedAt
    - Evicts the oldest event when the log is full
    """
    payload = payload or ReportRequest()
    total = record_blocked_url(log, payload.blockedUrl, payload.reportedAt)
    return ReportResponse(totalRequests=total)


@router.get(
    "/",
    response_model=Union[RequestsResponse, LatestResponse],
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
    summary="Retrieve blocked URLs",
    description="Returns all stored events newest first, or only the newest with ?latest=true.",
)
async def list_blocked_urls(
    latest: Optional[str] = Query(default=None, description="'true' returns only the newest event"),
    log: EventLog = Depends(get_event_log),
) -> Union[RequestsResponse, LatestResponse]:
    if latest == "true":
        event, total = log.list_latest()
        return LatestResponse(latest=event, totalRequests=total)

    events, total = log.list_all()
    return RequestsResponse(requests=events, totalRequests=total)


@router.get(
    "/ping",
    response_model=PingResponse,
    tags=["Health"],
    summary="Health check",
)
async def ping() -> PingResponse:
    """Lightweight heartbeat. Reporters call it to validate the endpoint."""
    return PingResponse(**build_ping())


@router.delete(
    "/cleanup",
    response_model=CleanupResponse,
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
    summary="Clear all blocked URLs",
)
async def cleanup(log: EventLog = Depends(get_event_log)) -> CleanupResponse:
    cleared = log.clear()
    return CleanupResponse(clearedCount=cleared)
