"""Data model for stored feedback entries.

A FeedbackEntry is created once per accepted submission and never modified or
deleted afterwards. Field names on disk and on the wire are camelCase
(``createdAt``) so existing feedback files stay readable.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


def utc_timestamp() -> str:
    """Return the current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class FeedbackEntry(BaseModel):
    """One user-submitted feedback record."""

    # Unknown keys already present in the file are kept so a rewrite never drops them.
    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: str
    name: str
    email: str = ""
    feedback: str
    created_at: str = Field(alias="createdAt")

    @classmethod
    def create(cls, name: str, feedback: str, email: str = "") -> "FeedbackEntry":
        """Build a new entry with a fresh id and timestamp."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            email=email or "",
            feedback=feedback,
            created_at=utc_timestamp(),
        )

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the JSON-ready dict stored on disk and returned by the API."""
        return self.model_dump(by_alias=True)
