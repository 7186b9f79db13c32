"""
Blocked Event — Immutable record of one reported block.

Wire shape is flat: the reporter's `blockedUrl` fields merged with
`reportedAt`, e.g.

    {
        "url": "https://ads.example.com/",
        "timestamp": "2024-01-01T00:00:00.000Z",   # reporter clock
        "tabId": 12,
        "frameId": 0,
        "reportedAt": "2024-01-01T00:00:00.120Z"    # send time, stored verbatim
    }
"""

import copy
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from listener.exceptions import EventValidationError


class BlockedEvent(BaseModel):
    """
    A reported blocking occurrence.

    Fields other than url/timestamp/reportedAt (tabId, frameId, ...) are
    opaque pass-through values kept as pydantic extras.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    url: str = Field(..., min_length=1, description="Navigation target that was blocked")
    timestamp: Optional[str] = Field(
        default=None, description="When the browser observed the block (ISO 8601)"
    )
    reported_at: str = Field(
        ..., alias="reportedAt", min_length=1, description="Send time, stored verbatim"
    )

    @classmethod
    def from_report(
        cls, blocked_url: Mapping[str, Any], reported_at: Any
    ) -> "BlockedEvent":
        """
        Build an event from a reporter payload.

        Raises:
            EventValidationError: url or reportedAt missing or empty
        """
        if not isinstance(blocked_url, Mapping):
            raise EventValidationError("blockedUrl must be an object")

        url = blocked_url.get("url")
        if not isinstance(url, str) or not url:
            raise EventValidationError("blockedUrl.url must be a non-empty string")
        if not isinstance(reported_at, str) or not reported_at:
            raise EventValidationError("reportedAt must be a non-empty string")

        fields = copy.deepcopy(dict(blocked_url))
        fields["reportedAt"] = reported_at
        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            raise EventValidationError(
                f"Invalid blocked URL event: {e.errors()[0]['msg']}"
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """Detached wire representation; safe for callers to mutate."""
        data: Dict[str, Any] = {"url": self.url}
        if "timestamp" in self.model_fields_set:
            data["timestamp"] = self.timestamp
        data.update(copy.deepcopy(self.model_extra or {}))
        data["reportedAt"] = self.reported_at
        return data
