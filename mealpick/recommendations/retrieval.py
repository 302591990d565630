from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence

from .data_store import get_catalog, get_menu
from .models import MenuItem, RecommendationResponse, Selections
from .reasons import explain
from .scoring import score
from .selector import DEFAULT_ALTERNATIVES, RandomSource, pick

logger = logging.getLogger(__name__)


def get_recommendations(
    selections: Selections,
    exclude_ids: Iterable[str] = (),
    weather_temp: float | None = None,
    catalog: Sequence[MenuItem] | None = None,
    rng: RandomSource | None = None,
    count: int = DEFAULT_ALTERNATIVES,
) -> RecommendationResponse:
    """Score, sample and explain one recommendation for a selection snapshot.

    ``recommended`` is ``None`` when exclusions leave nothing to choose from.
    """
    start_time = time.time()
    menus = list(get_catalog() if catalog is None else catalog)
    excluded = list(exclude_ids)

    scored = score(menus, selections, excluded, weather_temp)
    result = pick(scored, count=count, rng=rng)
    reason = explain(result.primary, selections) if result.primary else None

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "recommendation: candidates=%d excluded=%d weather_temp=%s picked=%s alternatives=%s (%.1f ms)",
        len(scored),
        len(excluded),
        weather_temp,
        result.primary.id if result.primary else None,
        [m.id for m in result.alternatives],
        elapsed_ms,
    )

    return RecommendationResponse(
        recommended=result.primary,
        alternatives=result.alternatives,
        reason=reason,
        total_candidates=len(scored),
    )


def get_reason(menu_id: str, selections: Selections) -> str:
    """Reason text for a catalog item. Raises ``KeyError`` for an unknown id."""
    return explain(get_menu(menu_id), selections)
