"""Error payload returned across the API boundary."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExternalError(BaseModel):
    """The only failure shape that ever leaves the service."""

    kind: str = Field(..., description="Stable error code, e.g. NOT_FOUND")
    message: str
    status: int = Field(..., description="HTTP-equivalent status code")
    details: Any | None = None

    model_config = ConfigDict(frozen=True)
