"""FastAPI router for AI look suggestion endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from aura_stylist.config import logger
from aura_stylist.core.errors import StylistError
from aura_stylist.services.vip_looks_service import generate_vip_looks

from ..utils import http_error
from .dependencies import get_current_user
from .models import VipLooksRequest, VipLooksResponse

router = APIRouter(prefix="/api/v1/looks", tags=["Looks"])


@router.post("/vip", response_model=VipLooksResponse)
async def suggest_vip_looks(
    payload: VipLooksRequest,
    user: dict = Depends(get_current_user),
) -> VipLooksResponse:
    """Generate VIP looks from the caller's wardrobe and color profile."""

    logger.info(
        "VIP looks request received",
        extra={"user_id": user["id"], "count": payload.count},
    )

    try:
        result = await generate_vip_looks(user["id"], payload.count)
    except StylistError as exc:
        logger.warning(
            "VIP looks request failed",
            extra={"user_id": user["id"], "error": exc.code},
        )
        raise http_error(exc)
    except Exception as exc:
        logger.error("Unexpected error in VIP looks request", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail={"error": "internal_error", "message": str(exc)},
        )

    return VipLooksResponse(looks=result.looks)
