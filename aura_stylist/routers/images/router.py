"""FastAPI router for image normalization endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Response

from aura_stylist.config import logger
from aura_stylist.core.errors import StylistError
from aura_stylist.core.image_codec import ImageCodec
from aura_stylist.core.image_preprocessing import (
    ConversionResult,
    inspect_geometry,
    normalize_for_flat_object,
    normalize_for_portrait_subject,
)

from ..utils import http_error
from .dependencies import get_image_codec
from .models import FlatObjectRequest, GeometryResponse, InspectRequest, PortraitRequest

router = APIRouter(prefix="/api/v1/images", tags=["Images"])


def _image_response(result: ConversionResult) -> Response:
    return Response(
        content=result.data,
        media_type=result.content_type,
        headers={
            "X-Image-Width": str(result.width),
            "X-Image-Height": str(result.height),
        },
    )


@router.post("/portrait")
async def normalize_portrait(
    payload: PortraitRequest,
    codec: ImageCodec = Depends(get_image_codec),
) -> Response:
    """Crop and resize an avatar image to the portrait geometry."""

    try:
        result = await normalize_for_portrait_subject(
            payload.source,
            target_height=payload.target_height,
            quality=payload.quality,
            codec=codec,
        )
    except StylistError as exc:
        logger.warning("Portrait normalization failed", extra={"error": exc.message})
        raise http_error(exc)
    except Exception as exc:
        logger.error("Unexpected error normalizing portrait", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail={"error": "internal_error", "message": str(exc)},
        )

    return _image_response(result)


@router.post("/flat")
async def normalize_flat_object(
    payload: FlatObjectRequest,
    codec: ImageCodec = Depends(get_image_codec),
) -> Response:
    """Downscale a garment image and flatten it onto white."""

    try:
        result = await normalize_for_flat_object(
            payload.source,
            max_dimension=payload.max_dimension,
            quality=payload.quality,
            codec=codec,
        )
    except StylistError as exc:
        logger.warning("Flat object normalization failed", extra={"error": exc.message})
        raise http_error(exc)
    except Exception as exc:
        logger.error("Unexpected error normalizing flat object", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail={"error": "internal_error", "message": str(exc)},
        )

    return _image_response(result)


@router.post("/inspect", response_model=GeometryResponse)
async def inspect_image(
    payload: InspectRequest,
    codec: ImageCodec = Depends(get_image_codec),
) -> GeometryResponse:
    """Report image geometry and whether normalization is recommended."""

    try:
        geometry = await inspect_geometry(payload.source, codec=codec)
    except StylistError as exc:
        logger.warning("Image inspection failed", extra={"error": exc.message})
        raise http_error(exc)
    except Exception as exc:
        logger.error("Unexpected error inspecting image", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail={"error": "internal_error", "message": str(exc)},
        )

    return GeometryResponse(**geometry.to_dict())
