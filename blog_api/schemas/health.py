"""Schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status, environment, database reachability and upload directory state."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] | None = None
    uploads: Literal["writable", "unavailable"] | None = None
