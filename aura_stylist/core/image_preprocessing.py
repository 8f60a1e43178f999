"""
Image preprocessing for virtual try-on and look rendering.
Normalizes portrait (avatar) and flat-object (garment) images so the
downstream models receive consistent geometry and a single JPEG format.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image

from aura_stylist.config import logger
from aura_stylist.core.image_codec import (
    OUTPUT_CONTENT_TYPE,
    ImageCodec,
    PillowImageCodec,
)

PORTRAIT_ASPECT = 3 / 4
DEFAULT_TARGET_HEIGHT = 1365
DEFAULT_MAX_DIMENSION = 1024
DEFAULT_QUALITY = 92

# Dark background matching the app theme
PORTRAIT_BACKGROUND = "#1a1a2e"
# Garments are usually cutouts with transparency
FLAT_BACKGROUND = "#ffffff"

ASPECT_TOLERANCE = 0.1
MAX_INSPECT_WIDTH = 1500
MAX_INSPECT_HEIGHT = 2000


@dataclass(frozen=True)
class GeometrySpec:
    """Target geometry and encoding quality for one conversion."""

    target_height: Optional[int] = None
    aspect_ratio: Optional[float] = None
    max_dimension: Optional[int] = None
    quality: int = DEFAULT_QUALITY

    @property
    def target_width(self) -> int:
        if self.target_height is None or self.aspect_ratio is None:
            raise ValueError("target_width requires target_height and aspect_ratio")
        return round(self.target_height * self.aspect_ratio)


@dataclass(frozen=True)
class CropBox:
    """Source region in pixel coordinates; may be fractional."""

    x: float
    y: float
    width: float
    height: float

    def as_box(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class ConversionResult:
    data: bytes
    width: int
    height: int
    content_type: str = OUTPUT_CONTENT_TYPE


@dataclass(frozen=True)
class ImageGeometry:
    width: int
    height: int
    aspect_ratio: float
    is_portrait: bool
    needs_normalization: bool

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "aspect_ratio": self.aspect_ratio,
            "is_portrait": self.is_portrait,
            "needs_normalization": self.needs_normalization,
        }


def compute_portrait_crop(
    width: int, height: int, aspect_ratio: float = PORTRAIT_ASPECT
) -> CropBox:
    """
    Return the source region that matches ``aspect_ratio``.

    Too-wide images lose equal strips on the left and right. Too-tall images
    lose only the bottom so the head stays in frame.
    """
    source_aspect = width / height

    if source_aspect > aspect_ratio:
        crop_width = height * aspect_ratio
        return CropBox(x=(width - crop_width) / 2, y=0, width=crop_width, height=height)

    if source_aspect < aspect_ratio:
        crop_height = width / aspect_ratio
        return CropBox(x=0, y=0, width=width, height=crop_height)

    return CropBox(x=0, y=0, width=width, height=height)


def compute_flat_size(width: int, height: int, max_dimension: int) -> Tuple[int, int]:
    """Shrink so the larger side equals ``max_dimension``; never upscale."""
    if width <= max_dimension and height <= max_dimension:
        return width, height

    if width > height:
        return max_dimension, max(1, round(height / width * max_dimension))
    return max(1, round(width / height * max_dimension)), max_dimension


def _flatten_onto(
    raster: Image.Image, size: Tuple[int, int], background: str
) -> Image.Image:
    canvas = Image.new("RGB", size, background)
    layer = raster.convert("RGBA")
    canvas.paste(layer, (0, 0), layer)
    return canvas


async def normalize_for_portrait_subject(
    source: str,
    target_height: int = DEFAULT_TARGET_HEIGHT,
    aspect_ratio: float = PORTRAIT_ASPECT,
    quality: int = DEFAULT_QUALITY,
    *,
    codec: Optional[ImageCodec] = None,
) -> ConversionResult:
    """
    Prepare an avatar image: crop to a portrait aspect, scale to exactly
    ``target_width x target_height`` and encode as JPEG.

    Raises:
        DecodeError: If the source cannot be decoded
        EncodeError: If encoding yields no payload
    """
    codec = codec or PillowImageCodec()
    geometry = GeometrySpec(
        target_height=target_height, aspect_ratio=aspect_ratio, quality=quality
    )
    size = (geometry.target_width, target_height)

    asset = await codec.decode(source)
    crop = compute_portrait_crop(asset.width, asset.height, aspect_ratio)

    resized = asset.raster.convert("RGBA").resize(
        size, Image.Resampling.LANCZOS, box=crop.as_box()
    )
    canvas = _flatten_onto(resized, size, PORTRAIT_BACKGROUND)
    data = await codec.encode(canvas, geometry.quality)

    logger.info(
        "Portrait image normalized",
        extra={
            "source_size": (asset.width, asset.height),
            "crop": crop.as_box(),
            "output_size": size,
        },
    )
    return ConversionResult(data=data, width=size[0], height=size[1])


async def normalize_for_flat_object(
    source: str,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
    quality: int = DEFAULT_QUALITY,
    *,
    codec: Optional[ImageCodec] = None,
) -> ConversionResult:
    """Prepare a garment image: proportional downscale, white background, JPEG."""
    codec = codec or PillowImageCodec()
    geometry = GeometrySpec(max_dimension=max_dimension, quality=quality)

    asset = await codec.decode(source)
    size = compute_flat_size(asset.width, asset.height, max_dimension)

    raster = asset.raster.convert("RGBA")
    if size != raster.size:
        raster = raster.resize(size, Image.Resampling.LANCZOS)
    canvas = _flatten_onto(raster, size, FLAT_BACKGROUND)
    data = await codec.encode(canvas, geometry.quality)

    logger.info(
        "Flat object image normalized",
        extra={"source_size": (asset.width, asset.height), "output_size": size},
    )
    return ConversionResult(data=data, width=size[0], height=size[1])


async def inspect_geometry(
    source: str, *, codec: Optional[ImageCodec] = None
) -> ImageGeometry:
    """Report whether an image already satisfies the portrait geometry."""
    codec = codec or PillowImageCodec()
    asset = await codec.decode(source)

    width, height = asset.width, asset.height
    aspect_ratio = width / height
    needs_normalization = (
        abs(aspect_ratio - PORTRAIT_ASPECT) > ASPECT_TOLERANCE
        or width > MAX_INSPECT_WIDTH
        or height > MAX_INSPECT_HEIGHT
    )

    return ImageGeometry(
        width=width,
        height=height,
        aspect_ratio=aspect_ratio,
        is_portrait=height > width,
        needs_normalization=needs_normalization,
    )


__all__ = [
    "GeometrySpec",
    "CropBox",
    "ConversionResult",
    "ImageGeometry",
    "compute_portrait_crop",
    "compute_flat_size",
    "normalize_for_portrait_subject",
    "normalize_for_flat_object",
    "inspect_geometry",
]
