"""
계정 관련 스키마
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class Credentials(BaseModel):
    """Register / login body. Blank fields are rejected by the router."""
    email: Optional[str] = None
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
