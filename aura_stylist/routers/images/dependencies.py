"""FastAPI dependencies for the image endpoints."""

from aura_stylist.core.image_codec import ImageCodec, PillowImageCodec


def get_image_codec() -> ImageCodec:
    return PillowImageCodec()
