"""Health check response schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response.

    The service stays usable when the synonym service is down (every phrase
    simply yields only itself), so that case reports "degraded".
    """

    status: Literal["ok", "degraded"] = Field(
        ...,
        description="Service health status",
        examples=["ok"],
    )
    version: str = Field(
        ...,
        description="API version",
        examples=["0.1.0"],
    )
    synonym_service: Literal["reachable", "unreachable"] = Field(
        ...,
        description="Synonym service connectivity",
        examples=["reachable"],
    )
