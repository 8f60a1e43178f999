"""
Access token verification backed by Supabase Auth.
Session issuing and refresh stay with the Supabase client SDK in the app.
"""

from typing import Any, Dict, Optional

from aura_stylist.config import logger
from aura_stylist.db import get_supabase_client


def parse_authorization_header(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the bearer token from an Authorization header value.

    Both ``Bearer <token>`` and a bare token are accepted.

    Returns:
        The token, or None if the header is missing or blank
    """
    if not authorization:
        return None

    value = authorization.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == "bearer":
        value = rest.strip()
    return value or None


async def verify_access_token(access_token: str) -> Optional[Dict[str, Any]]:
    """
    Verify a Supabase Auth access token and return user data.

    Args:
        access_token: JWT access token from Supabase Auth

    Returns:
        User dict if token is valid, None otherwise
    """
    try:
        client = get_supabase_client()

        logger.debug("Verifying Supabase Auth access token")

        response = client.auth.get_user(access_token)

        if response and getattr(response, "user", None):
            user_data = {
                "id": response.user.id,
                "email": response.user.email or "",
            }
            logger.debug(f"Token verified for user: {response.user.id}")
            return user_data

        logger.warning("Invalid or expired access token")
        return None

    except Exception as e:
        logger.error(f"Error verifying access token: {e}")
        return None
