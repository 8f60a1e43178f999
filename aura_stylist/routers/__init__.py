"""Router package exposing all API routers."""

from fastapi import APIRouter

from .images.router import router as images_router
from .looks.router import router as looks_router

router = APIRouter()
router.include_router(looks_router)
router.include_router(images_router)


@router.get("/api/v1/health")
async def health_check() -> dict:
    """Simple health check endpoint."""

    return {
        "status": "healthy",
        "service": "aura-stylist-api",
        "version": "1.0.0",
    }


__all__ = ["router", "images_router", "looks_router"]
