from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Tier = Literal["free", "premium", "admin"]


class Quota(BaseModel):
    tier: Tier
    # None means unlimited.
    remaining: int | None = Field(default=None, ge=0)
    period: str


class TierUpdateRequest(BaseModel):
    tier: Tier
