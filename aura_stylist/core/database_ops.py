"""
Database operations for the look-generation pipeline.
Reads profiles and wardrobe items, and caches generated looks in Supabase.
"""

from typing import Any, Dict, List, Optional

from aura_stylist.config import logger
from aura_stylist.db import get_supabase_client
from aura_stylist.models import ColorProfile, SuggestedLook, WardrobeItem

PROFILES_TABLE = "profiles"
WARDROBE_TABLE = "wardrobe_items"
RECOMMENDED_LOOKS_TABLE = "recommended_looks"


async def fetch_color_profile(user_id: str) -> Optional[ColorProfile]:
    """
    Retrieve the chromatic profile for a user.

    Args:
        user_id: Owner of the profile

    Returns:
        ColorProfile, or None if the user has no profile row

    Raises:
        Exception: If database operation fails
    """
    try:
        client = get_supabase_client()

        logger.debug(f"Retrieving color profile for user {user_id}")

        response = (
            client.table(PROFILES_TABLE)
            .select("color_season, color_analysis")
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )

        if response.data:
            return ColorProfile.model_validate(response.data[0])

        logger.warning(f"No color profile found for user {user_id}")
        return None

    except Exception as e:
        logger.error(f"Error retrieving color profile for user {user_id}: {e}")
        raise


async def fetch_wardrobe_items(user_id: str) -> List[WardrobeItem]:
    """
    Retrieve a user's wardrobe ordered by chromatic compatibility label.

    Args:
        user_id: Owner of the wardrobe

    Returns:
        List of WardrobeItem records (possibly empty)

    Raises:
        Exception: If database operation fails
    """
    try:
        client = get_supabase_client()

        response = (
            client.table(WARDROBE_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("chromatic_compatibility")
            .execute()
        )

        items = [WardrobeItem.model_validate(row) for row in response.data or []]
        logger.debug(f"Retrieved {len(items)} wardrobe items for user {user_id}")
        return items

    except Exception as e:
        logger.error(f"Error retrieving wardrobe items for user {user_id}: {e}")
        raise


async def insert_recommended_looks(
    user_id: str,
    occasion: str,
    looks: List[SuggestedLook],
) -> Dict[str, Any]:
    """
    Cache a generated look collection for the user.

    Args:
        user_id: Owner of the looks
        occasion: Occasion tag the collection is stored under (e.g. 'vip')
        looks: Enriched, ranked looks

    Returns:
        Dict containing the inserted record

    Raises:
        Exception: If database operation fails
    """
    try:
        client = get_supabase_client()

        record_data = {
            "user_id": user_id,
            "occasion": occasion,
            "look_data": {"looks": [look.model_dump() for look in looks]},
        }

        response = client.table(RECOMMENDED_LOOKS_TABLE).insert(record_data).execute()

        if response.data and len(response.data) > 0:
            record = response.data[0]
            logger.info(
                f"Cached {len(looks)} '{occasion}' looks for user {user_id} "
                f"(record {record.get('id')})"
            )
            return record
        else:
            error_msg = "Failed to cache recommended looks: No data returned"
            logger.error(error_msg)
            raise Exception(error_msg)

    except Exception as e:
        logger.error(f"Error caching recommended looks for user {user_id}: {e}")
        raise
