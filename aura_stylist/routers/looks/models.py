"""Pydantic models used by the look router."""

from typing import List

from pydantic import BaseModel, Field

from aura_stylist.models import SuggestedLook


class VipLooksRequest(BaseModel):
    count: int = Field(3, ge=1, le=10, description="Number of looks to generate")


class VipLooksResponse(BaseModel):
    looks: List[SuggestedLook]
