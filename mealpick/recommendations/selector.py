from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol

from .models import MenuItem, Recommendation, ScoredMenu

MIN_POSITIVE_CANDIDATES = 3
POSITIVE_POOL_SIZE = 10
FALLBACK_POOL_SIZE = 8

WEIGHT_EXPONENT = 1.8
WEIGHT_FLOOR = 0.05

DEFAULT_ALTERNATIVES = 3


class RandomSource(Protocol):
    def random(self) -> float: ...


def build_pool(scored: Sequence[ScoredMenu]) -> list[ScoredMenu]:
    """Sort by score and cut the candidate pool.

    Top 10 positive scorers when at least 3 items score above zero, otherwise
    the top 8 regardless of sign so a weak signal still yields a pick.
    """
    ranked = sorted(scored, key=lambda s: s.score, reverse=True)
    positives = [s for s in ranked if s.score > 0]
    if len(positives) >= MIN_POSITIVE_CANDIDATES:
        return positives[:POSITIVE_POOL_SIZE]
    return ranked[:FALLBACK_POOL_SIZE]


def draw_weights(pool: Sequence[ScoredMenu]) -> list[float]:
    """Selection weights for a score-sorted pool: ``n ** 1.8 + 0.05`` with n in [0, 1]."""
    if not pool:
        return []
    top = pool[0].score
    low = max(pool[-1].score, 1)
    low = min(low, top)
    span = top - low + 1

    weights: list[float] = []
    for candidate in pool:
        normalized = (candidate.score - low + 1) / span
        normalized = min(max(normalized, 0.0), 1.0)
        weights.append(normalized ** WEIGHT_EXPONENT + WEIGHT_FLOOR)
    return weights


def weighted_pick(pool: Sequence[ScoredMenu], rng: RandomSource | None = None) -> MenuItem:
    """Cumulative-weight draw over a non-empty, score-sorted pool."""
    if len(pool) == 1:
        return pool[0].menu

    weights = draw_weights(pool)
    draw = (rng or random).random() * sum(weights)
    for candidate, weight in zip(pool, weights):
        if draw < weight:
            return candidate.menu
        draw -= weight
    # Float rounding can leave a sliver past the last weight.
    return pool[-1].menu


def pick_alternatives(
    pool: Sequence[ScoredMenu], primary: MenuItem, count: int = DEFAULT_ALTERNATIVES,
) -> list[MenuItem]:
    """Prefer items adding a new cuisine or dish type, then fill by score."""
    if len(pool) <= count:
        return [s.menu for s in pool]

    chosen: list[ScoredMenu] = []
    seen_cuisines = set(primary.tags.cuisine)
    seen_dish_types = set(primary.tags.dish_type)

    for candidate in pool:
        if len(chosen) >= count:
            break
        tags = candidate.menu.tags
        new_cuisine = any(c not in seen_cuisines for c in tags.cuisine)
        new_dish_type = any(d not in seen_dish_types for d in tags.dish_type)
        if new_cuisine or new_dish_type:
            chosen.append(candidate)
            seen_cuisines.update(tags.cuisine)
            seen_dish_types.update(tags.dish_type)

    for candidate in pool:
        if len(chosen) >= count:
            break
        if all(candidate.menu.id != c.menu.id for c in chosen):
            chosen.append(candidate)

    return [s.menu for s in chosen]


def pick(
    scored: Sequence[ScoredMenu],
    count: int = DEFAULT_ALTERNATIVES,
    rng: RandomSource | None = None,
) -> Recommendation:
    pool = build_pool(scored)
    if not pool:
        return Recommendation(primary=None, alternatives=[])

    primary = weighted_pick(pool, rng)
    remaining = [s for s in pool if s.menu.id != primary.id]
    return Recommendation(primary=primary, alternatives=pick_alternatives(remaining, primary, count))
