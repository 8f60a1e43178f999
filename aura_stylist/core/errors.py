"""
Error taxonomy shared by the image and look-generation pipelines.
Each error carries the HTTP status and machine-readable code the API exposes.
"""

from typing import Any, Dict, Optional


class StylistError(Exception):
    """Base class for every user-presentable failure."""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_detail(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


# --- image pipeline ---


class DecodeError(StylistError):
    status_code = 422
    code = "decode_failed"
    default_message = "Failed to load image for preprocessing"


class EncodeError(StylistError):
    status_code = 500
    code = "encode_failed"
    default_message = "Failed to create image blob"


# --- look generation pipeline ---


class AuthRequired(StylistError):
    status_code = 401
    code = "auth_required"
    default_message = "Authorization required"


class Unauthorized(StylistError):
    status_code = 401
    code = "unauthorized"
    default_message = "Unauthorized"


class InsufficientInput(StylistError):
    status_code = 400
    code = "insufficient_wardrobe"
    default_message = "Add at least 3 pieces to receive exclusive VIP looks."


class ServiceUnavailable(StylistError):
    status_code = 503
    code = "service_unavailable"
    default_message = "AI gateway failed after retries"


class RateLimited(StylistError):
    status_code = 429
    code = "rate_limited"
    default_message = "Too many requests. Try again in a few seconds."


class QuotaExceeded(StylistError):
    status_code = 402
    code = "quota_exceeded"
    default_message = "AI credits exhausted."


class MalformedResponseError(StylistError):
    status_code = 502
    code = "malformed_response"
    default_message = "Failed to process VIP suggestions"


__all__ = [
    "StylistError",
    "DecodeError",
    "EncodeError",
    "AuthRequired",
    "Unauthorized",
    "InsufficientInput",
    "ServiceUnavailable",
    "RateLimited",
    "QuotaExceeded",
    "MalformedResponseError",
]
