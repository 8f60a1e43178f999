from typing import Optional

from supabase import Client, create_client

from aura_stylist.config import logger
from aura_stylist.config import SUPABASE_SERVICE_KEY, SUPABASE_URL


_supabase_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get or create the service-role Supabase client shared by auth and data access.

    Returns:
        Client: Supabase client instance

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_SERVICE_KEY is not configured
    """
    global _supabase_client

    if _supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
            error_msg = "SUPABASE_URL or SUPABASE_SERVICE_KEY is not configured"
            logger.error(error_msg)
            raise ValueError(error_msg)

        try:
            _supabase_client = create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY)
            logger.info("Supabase client connected successfully!")
        except Exception as e:
            logger.error(f"Failed to create Supabase client: {e}")
            raise

    return _supabase_client
