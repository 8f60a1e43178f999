"""
Image codec capability used by the normalization pipeline.
Resolves image references (URL, data URI, or base64) into Pillow rasters
and encodes rasters back to JPEG bytes.
"""

import asyncio
import base64
import binascii
from dataclasses import dataclass
from io import BytesIO
from typing import Protocol

import httpx
from PIL import Image, ImageOps, UnidentifiedImageError

from aura_stylist.config import logger
from aura_stylist.core.errors import DecodeError, EncodeError

OUTPUT_FORMAT = "JPEG"
OUTPUT_CONTENT_TYPE = "image/jpeg"


@dataclass
class ImageAsset:
    """A decoded source image. Lives only for the duration of one conversion."""

    source: str
    raster: Image.Image

    @property
    def width(self) -> int:
        return self.raster.width

    @property
    def height(self) -> int:
        return self.raster.height


class ImageCodec(Protocol):
    async def decode(self, source: str) -> ImageAsset: ...

    async def encode(self, raster: Image.Image, quality: int) -> bytes: ...


def _is_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def _describe(source: str) -> str:
    if _is_url(source):
        return source
    return f"<inline image, {len(source)} chars>"


class PillowImageCodec:
    """Default codec backed by httpx for fetching and Pillow for raster work."""

    def __init__(
        self,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def decode(self, source: str) -> ImageAsset:
        payload = await self._read_source(source)

        try:
            raster = await asyncio.to_thread(_open_raster, payload)
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as exc:
            logger.error(
                "Image decode failed",
                extra={"source": _describe(source), "error": str(exc)},
            )
            raise DecodeError("Failed to load image for preprocessing") from exc

        logger.debug(
            "Decoded image",
            extra={"source": _describe(source), "size": raster.size},
        )
        return ImageAsset(source=source, raster=raster)

    async def encode(self, raster: Image.Image, quality: int) -> bytes:
        try:
            data = await asyncio.to_thread(_save_jpeg, raster, quality)
        except (OSError, ValueError) as exc:
            raise EncodeError(f"Failed to create image blob: {exc}") from exc

        if not data:
            raise EncodeError("Failed to create image blob")
        return data

    async def _read_source(self, source: str) -> bytes:
        """Return the raw bytes behind an image reference."""

        if _is_url(source):
            try:
                async with httpx.AsyncClient(
                    timeout=self._timeout, transport=self._transport
                ) as client:
                    response = await client.get(source)
                    response.raise_for_status()
                    return response.content
            except httpx.HTTPStatusError as exc:
                raise DecodeError(
                    f"Failed to fetch image from {source}: HTTP {exc.response.status_code}"
                ) from exc
            except httpx.RequestError as exc:
                raise DecodeError(f"Network error fetching {source}: {exc}") from exc

        if source.startswith("data:"):
            try:
                encoded = source.split(",", 1)[1]
            except IndexError as exc:
                raise DecodeError("Invalid data URI provided for image input") from exc
        else:
            encoded = source.strip()

        if not encoded:
            raise DecodeError("Empty base64 image input provided")

        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError("Provided image string is not valid base64") from exc


def _open_raster(payload: bytes) -> Image.Image:
    image = Image.open(BytesIO(payload))
    image.load()
    # Match browser decoding: pixels upright per the EXIF orientation tag
    return ImageOps.exif_transpose(image)


def _save_jpeg(raster: Image.Image, quality: int) -> bytes:
    if raster.mode != "RGB":
        raster = raster.convert("RGB")
    buffer = BytesIO()
    raster.save(buffer, format=OUTPUT_FORMAT, quality=quality)
    return buffer.getvalue()


__all__ = [
    "ImageAsset",
    "ImageCodec",
    "PillowImageCodec",
    "OUTPUT_CONTENT_TYPE",
]
