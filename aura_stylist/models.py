"""Domain records shared by the look-generation pipeline."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DominantColor(BaseModel):
    name: str
    hex: str


class WardrobeItem(BaseModel):
    """A wardrobe row as stored in the ``wardrobe_items`` table."""

    model_config = ConfigDict(extra="ignore")

    id: str
    category: str
    name: Optional[str] = None
    dominant_colors: Optional[List[DominantColor]] = None
    color_code: Optional[str] = None
    image_url: Optional[str] = None
    chromatic_compatibility: Optional[str] = None


class ColorAnalysis(BaseModel):
    model_config = ConfigDict(extra="ignore")

    season: Optional[str] = None
    subtype: Optional[str] = None
    skin_tone: Optional[str] = None
    undertone: Optional[str] = None
    recommended_colors: Optional[List[str]] = None
    avoid_colors: Optional[List[str]] = None


class ColorProfile(BaseModel):
    """Subset of the ``profiles`` row used for prompting."""

    model_config = ConfigDict(extra="ignore")

    color_season: Optional[str] = None
    color_analysis: Optional[ColorAnalysis] = None


class LookItem(BaseModel):
    """Resolved wardrobe item embedded in a suggested look."""

    id: str
    name: Optional[str] = None
    category: str
    image_url: Optional[str] = None
    chromatic_compatibility: Optional[str] = None


class SuggestedLook(BaseModel):
    """
    A generated look. Creative fields come from the model and are kept as-is;
    ``chromatic_score`` and ``vip_tier`` are always recomputed locally.
    """

    model_config = ConfigDict(extra="allow")

    name: Any = None
    occasion: Any = None
    styling_tip: Any = None
    items: List[LookItem] = Field(default_factory=list)
    chromatic_score: int = Field(ge=0, le=100)
    vip_tier: str
