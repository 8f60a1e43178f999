"""
Parsing and score reconciliation for generated looks.

The model's own ``chromatic_score`` and ``vip_tier`` are never trusted: both are
recomputed from the compatibility labels of the wardrobe items a look
actually references.
"""

import json
import math
import re
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from pydantic import ValidationError

from aura_stylist.config import logger
from aura_stylist.core.errors import MalformedResponseError
from aura_stylist.models import LookItem, SuggestedLook, WardrobeItem

COMPATIBILITY_SCORES: Mapping[str, int] = {
    "ideal": 100,
    "neutral": 50,
    "avoid": 0,
}
UNKNOWN_COMPATIBILITY_SCORE = 25

GOLD_THRESHOLD = 90
SILVER_THRESHOLD = 75

# First "{" to last "}" across the whole text
_JSON_SPAN_RE = re.compile(r"\{[\s\S]*\}")


def extract_json_object(raw_text: str) -> Dict[str, Any]:
    """Parse the brace-delimited JSON object embedded in model output."""

    raw_text = raw_text or ""
    match = _JSON_SPAN_RE.search(raw_text)
    if not match:
        logger.error(f"No JSON object found in AI response: {raw_text[:500]!r}")
        raise MalformedResponseError("No JSON object found in AI response")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        logger.error(f"Failed to parse AI response: {raw_text[:500]!r}")
        raise MalformedResponseError("Failed to process VIP suggestions") from exc

    if not isinstance(data, dict):
        raise MalformedResponseError("AI response JSON is not an object")
    return data


def score_for_compatibility(label: Any) -> int:
    return COMPATIBILITY_SCORES.get(label, UNKNOWN_COMPATIBILITY_SCORE)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_chromatic_score(items: Sequence[WardrobeItem]) -> int:
    """Mean of the items' compatibility scores; 0 for an empty look."""
    if not items:
        return 0
    scores = [score_for_compatibility(item.chromatic_compatibility) for item in items]
    return _round_half_up(sum(scores) / len(scores))


def tier_for_score(score: int) -> str:
    if score >= GOLD_THRESHOLD:
        return "gold"
    if score >= SILVER_THRESHOLD:
        return "silver"
    return "bronze"


def resolve_items(
    item_ids: Iterable[Any], wardrobe: Mapping[str, WardrobeItem]
) -> List[WardrobeItem]:
    """Map ids to wardrobe items, dropping ids that do not resolve."""
    return [wardrobe[item_id] for item_id in item_ids if item_id in wardrobe]


def _summarize(item: WardrobeItem) -> LookItem:
    return LookItem(
        id=item.id,
        name=item.name,
        category=item.category,
        image_url=item.image_url,
        chromatic_compatibility=item.chromatic_compatibility,
    )


def enrich_look(
    look: Mapping[str, Any], wardrobe: Mapping[str, WardrobeItem]
) -> SuggestedLook:
    raw_ids = look.get("items")
    if not isinstance(raw_ids, list):
        raw_ids = []
    item_ids = [item_id for item_id in raw_ids if isinstance(item_id, str)]
    resolved = resolve_items(item_ids, wardrobe)
    score = compute_chromatic_score(resolved)

    try:
        return SuggestedLook.model_validate(
            {
                **look,
                "items": [_summarize(item) for item in resolved],
                "chromatic_score": score,
                "vip_tier": tier_for_score(score),
            }
        )
    except ValidationError as exc:
        raise MalformedResponseError(f"Invalid look in AI response: {exc}") from exc


def enrich_looks(
    payload: Mapping[str, Any], items: Sequence[WardrobeItem]
) -> List[SuggestedLook]:
    """Attach wardrobe details and authoritative scores to every generated look."""

    looks = payload.get("looks")
    if not isinstance(looks, list):
        raise MalformedResponseError("AI response is missing the 'looks' list")

    wardrobe: Dict[str, WardrobeItem] = {}
    for item in items:
        wardrobe.setdefault(item.id, item)

    enriched = []
    for look in looks:
        if not isinstance(look, dict):
            raise MalformedResponseError("AI response contains a non-object look")
        enriched.append(enrich_look(look, wardrobe))
    return enriched


def rank_looks(looks: Iterable[SuggestedLook]) -> List[SuggestedLook]:
    """Best score first; ties keep their generated order."""
    return sorted(looks, key=lambda look: look.chromatic_score, reverse=True)


__all__ = [
    "COMPATIBILITY_SCORES",
    "extract_json_object",
    "score_for_compatibility",
    "compute_chromatic_score",
    "tier_for_score",
    "resolve_items",
    "enrich_look",
    "enrich_looks",
    "rank_looks",
]
