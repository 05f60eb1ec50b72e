"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service liveness plus whether the account database answered a trivial query."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    version: str = Field(description="Running service version")
    environment: Literal["dev", "prod"] = Field(description="Current app environment")
    database: Literal["connected", "disconnected"] = Field(
        description="Account database connectivity",
    )
