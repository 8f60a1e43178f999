"""Service orchestrating VIP look generation for an authenticated user."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from aura_stylist.config import logger
from aura_stylist.core import database_ops
from aura_stylist.core.ai_gateway import AIGatewayClient
from aura_stylist.core.errors import InsufficientInput
from aura_stylist.core.look_scoring import enrich_looks, extract_json_object, rank_looks
from aura_stylist.core.prompt_templates import build_vip_looks_prompt
from aura_stylist.models import SuggestedLook

MIN_WARDROBE_ITEMS = 3
VIP_OCCASION = "vip"


def _log(level: int, message: str, **context: Any) -> None:
    """Helper to emit structured logs with contextual metadata."""
    logger.log(level, "%s | context=%s", message, context)


@dataclass(slots=True)
class VipLooksResult:
    looks: List[SuggestedLook] = field(default_factory=list)
    persisted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"looks": [look.model_dump() for look in self.looks]}


async def generate_vip_looks(
    user_id: str,
    count: int = 3,
    *,
    gateway: Optional[AIGatewayClient] = None,
) -> VipLooksResult:
    """
    Generate, score and cache VIP looks from the user's wardrobe.

    Raises:
        InsufficientInput: If the wardrobe has fewer than 3 items
        ServiceUnavailable, RateLimited, QuotaExceeded: From the gateway call
        MalformedResponseError: If the model output cannot be parsed
    """
    start_time = time.time()
    _log(logging.INFO, "vip_looks_started", user_id=user_id, count=count)

    profile = await database_ops.fetch_color_profile(user_id)
    items = await database_ops.fetch_wardrobe_items(user_id)

    if len(items) < MIN_WARDROBE_ITEMS:
        _log(
            logging.INFO,
            "vip_looks_insufficient_wardrobe",
            user_id=user_id,
            item_count=len(items),
        )
        raise InsufficientInput()

    gateway = gateway or AIGatewayClient()
    prompt = build_vip_looks_prompt(items, profile, count)

    content = await gateway.complete(prompt)
    payload = extract_json_object(content)
    looks = rank_looks(enrich_looks(payload, items))

    result = VipLooksResult(looks=looks)
    result.persisted = await _cache_looks(user_id, looks)

    _log(
        logging.INFO,
        "vip_looks_completed",
        user_id=user_id,
        look_count=len(looks),
        persisted=result.persisted,
        processing_time_ms=int((time.time() - start_time) * 1000),
    )
    return result


async def _cache_looks(user_id: str, looks: List[SuggestedLook]) -> bool:
    try:
        await database_ops.insert_recommended_looks(user_id, VIP_OCCASION, looks)
        return True
    except Exception as exc:
        _log(
            logging.WARNING,
            "vip_looks_cache_failed",
            user_id=user_id,
            error=str(exc),
        )
        return False
