"""
Pydantic Schemas — API Request/Response Models

Field names follow the browser extension's wire format (camelCase).

Constraints:
- blockedUrl and reportedAt are both required; presence is checked in the
  service layer so a missing field is answered with 400 {error}, not 422
- blockedUrl.url must be a non-empty string
- all other blockedUrl fields are opaque pass-through
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReportRequest(BaseModel):
    """Body of POST / as sent by a reporter."""
    model_config = ConfigDict(extra="ignore")

    blockedUrl: Optional[Dict[str, Any]] = Field(
        default=None, description="Blocked navigation: url, timestamp, tabId, frameId, ..."
    )
    reportedAt: Optional[str] = Field(
        default=None, description="Reporter send time (ISO 8601), stored verbatim"
    )


# ============================================================================
# Response Models
# ============================================================================

class ReportResponse(BaseModel):
    """Successful submission."""
    message: str = "Blocked URL recorded successfully"
    totalRequests: int


class RequestsResponse(BaseModel):
    """Full log, newest first."""
    requests: List[Dict[str, Any]]
    totalRequests: int


class LatestResponse(BaseModel):
    """Newest event only; latest is null on an empty log."""
    latest: Optional[Dict[str, Any]]
    totalRequests: int


class PingResponse(BaseModel):
    """Connectivity check used by reporters before enabling reporting."""
    status: str = "ok"
    message: str = "Server is running"
    timestamp: str


class CleanupResponse(BaseModel):
    """Result of DELETE /cleanup."""
    message: str = "All blocked URL requests cleared"
    clearedCount: int


class ErrorResponse(BaseModel):
    """Error body for 400 and 500 responses."""
    error: str
