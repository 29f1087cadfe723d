"""
API Models

Pydantic response models for the JSON endpoints. HTML pages are rendered from
``PostRecord`` / ``PostPage`` directly.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """
    Liveness plus a summary of the live snapshot.
    """
    status: Literal["ok", "loading"]
    posts: int = Field(..., ge=0)
    generation: int = Field(..., ge=0)
    loaded_at: Optional[datetime] = None

    model_config = ConfigDict(extra="forbid")
