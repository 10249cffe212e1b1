"""Pydantic models for the decoded upstream rate-limit payload."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ghratelimit.services.timestamps import INT64_MAX, INT64_MIN

# Resource buckets carried through from the upstream payload, in output order.
RESOURCE_NAMES: tuple[str, ...] = ("core", "search", "graphql", "integration_manifest")


class RateLimit(BaseModel):
    """A snapshot of one quota bucket."""

    model_config = ConfigDict(frozen=True, strict=True)

    limit: int = Field(
        ..., ge=INT64_MIN, le=INT64_MAX, description="Maximum requests allowed in the window"
    )
    remaining: int = Field(
        ..., ge=INT64_MIN, le=INT64_MAX, description="Requests left in the current window"
    )
    reset: datetime = Field(..., description="Instant (UTC) at which the window resets")


class Resources(BaseModel):
    """Per-resource quota buckets.  Only the fixed keys are kept."""

    model_config = ConfigDict(frozen=True)

    core: RateLimit
    search: RateLimit
    graphql: RateLimit
    integration_manifest: RateLimit


class RateLimitResponse(BaseModel):
    """Top-level payload of ``GET /rate_limit``."""

    model_config = ConfigDict(frozen=True)

    resources: Resources
    rate: RateLimit
