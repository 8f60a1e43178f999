"""Shared fixtures for the Aura Stylist test-suite."""

from __future__ import annotations

from typing import Dict, List

import pytest
from PIL import Image

from aura_stylist.core.errors import DecodeError
from aura_stylist.core.image_codec import ImageAsset
from aura_stylist.models import WardrobeItem


class RecordingCodec:
    """In-memory codec: serves prepared rasters and keeps what it encodes."""

    def __init__(self, images: Dict[str, Image.Image] | None = None) -> None:
        self.images = dict(images or {})
        self.encoded: List[Image.Image] = []
        self.qualities: List[int] = []
        self.decode_calls = 0

    async def decode(self, source: str) -> ImageAsset:
        self.decode_calls += 1
        if source not in self.images:
            raise DecodeError("Failed to load image for preprocessing")
        return ImageAsset(source=source, raster=self.images[source])

    async def encode(self, raster: Image.Image, quality: int) -> bytes:
        self.encoded.append(raster)
        self.qualities.append(quality)
        return b"\xff\xd8encoded"


@pytest.fixture
def codec() -> RecordingCodec:
    return RecordingCodec()


@pytest.fixture
def wardrobe() -> List[WardrobeItem]:
    rows = [
        {
            "id": "blazer",
            "category": "top",
            "name": "Blazer camelo",
            "dominant_colors": [{"name": "camel", "hex": "#C19A6B"}],
            "image_url": "https://cdn.test/blazer.jpg",
            "chromatic_compatibility": "ideal",
        },
        {
            "id": "skirt",
            "category": "bottom",
            "name": "Saia midi",
            "color_code": "#800020",
            "chromatic_compatibility": "ideal",
        },
        {
            "id": "tee",
            "category": "top",
            "name": None,
            "chromatic_compatibility": "neutral",
        },
        {
            "id": "boots",
            "category": "shoes",
            "name": "Bota neon",
            "chromatic_compatibility": "avoid",
        },
    ]
    return [WardrobeItem.model_validate(row) for row in rows]
