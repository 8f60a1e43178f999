"""FastAPI dependencies for the look endpoints."""

from typing import Optional

from fastapi import Header

from aura_stylist.config import logger
from aura_stylist.core import auth
from aura_stylist.core.errors import AuthRequired, Unauthorized

from ..utils import http_error


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
) -> dict:
    """Retrieve the authenticated user from a Supabase Auth Bearer token."""
    token = auth.parse_authorization_header(authorization)
    if not token:
        raise http_error(AuthRequired())

    user = await auth.verify_access_token(token)
    if not user:
        logger.warning("Look request rejected: invalid or expired token")
        raise http_error(Unauthorized())

    return user
