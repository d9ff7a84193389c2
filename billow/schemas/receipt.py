"""
Boundary types for receipt ingestion and retrieval (Pydantic v2).
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Ingestion
# ---------------------------------------------------------------------------

class UploadRequest(BaseModel):
    """A single uploaded file, already read off the multipart body."""
    filename: str = Field(..., description="Original name as sent by the client")
    content: bytes = Field(..., repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


class IngestResponse(BaseModel):
    message: str = "Receipt saved"
    text: str


# ---------------------------------------------------------------------------
# Stored receipt
# ---------------------------------------------------------------------------

class ReceiptRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    filename: str
    text: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # SQLite drops the offset; stored values are always UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ErrorResponse(BaseModel):
    error: str
    reason: Optional[str] = None
