"""Pydantic models used by the image router."""

from pydantic import BaseModel, Field

from aura_stylist.core.image_preprocessing import (
    DEFAULT_MAX_DIMENSION,
    DEFAULT_QUALITY,
    DEFAULT_TARGET_HEIGHT,
)


class PortraitRequest(BaseModel):
    source: str = Field(..., description="Image URL, data URI, or base64 payload")
    target_height: int = Field(DEFAULT_TARGET_HEIGHT, ge=64, le=4096)
    quality: int = Field(DEFAULT_QUALITY, ge=1, le=95)


class FlatObjectRequest(BaseModel):
    source: str = Field(..., description="Image URL, data URI, or base64 payload")
    max_dimension: int = Field(DEFAULT_MAX_DIMENSION, ge=64, le=4096)
    quality: int = Field(DEFAULT_QUALITY, ge=1, le=95)


class InspectRequest(BaseModel):
    source: str


class GeometryResponse(BaseModel):
    width: int
    height: int
    aspect_ratio: float
    is_portrait: bool
    needs_normalization: bool
