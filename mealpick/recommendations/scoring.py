"""
Menu scoring.

Maps a selection snapshot onto per-item scores:

- exclusion and conditional hard filters (cuisine, dish type),
- additive per-facet matching with fixed point weights,
- derived affinities (texture from taste, satiety and dish type from meal time),
- declarative synergy rules,
- real-temperature nudges from the weather.

Every contribution is recorded in ``ScoredMenu.breakdown`` under its own key.
Scoring holds no state and draws no random numbers.
"""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from .models import MenuItem, ScoredMenu, Selections

# Sentinel option ids meaning "no preference".
ANY = "상관없음"
ANY_TEMPERATURE = "상온"
NO_CONTEXT = "패스"

# Facets whose "no preference" option switches the whole facet off.
FACET_SENTINELS: dict[str, str] = {
    "cuisine": ANY,
    "cooking_method": ANY,
    "dish_type": ANY,
    "budget": ANY,
    "temperature": ANY_TEMPERATURE,
    "context": NO_CONTEXT,
}

MIN_CUISINE_FILTER_RESULTS = 3
MIN_DISH_TYPE_FILTER_RESULTS = 2

MEAL_TIME_MATCH = 30
MEAL_TIME_MISMATCH = -80
COMPANION_MATCH = 20
COMPANION_MISMATCH = -15
TASTE_PER_MATCH = 20
TASTE_RATIO_WEIGHT = 15
TASTE_MISMATCH = -30
TEMPERATURE_MATCH = 15
TEMPERATURE_MISMATCH = -20
BUDGET_MATCH = 15
BUDGET_MISMATCH = -10
CONTEXT_MATCH = 25
COOKING_METHOD_MATCH = 10
TEXTURE_PER_MATCH = 5
SATIETY_MATCH = 8
SATIETY_MISMATCH = -5

HOT_WEATHER_TEMP = 28
COLD_WEATHER_TEMP = 5
WEATHER_TEMP_BONUS = 8

# Textures that tend to go with each taste.
TEXTURE_AFFINITIES: dict[str, tuple[str, ...]] = {
    "매콤": ("쫄깃", "탱글"),
    "고소": ("바삭", "부드러움", "꾸덕"),
    "새콤": ("아삭", "탱글"),
    "담백": ("부드러움", "아삭"),
    "달콤": ("부드러움", "촉촉", "바삭"),
    "얼얼": ("쫄깃", "아삭"),
}

SATIETY_PREFERENCE: dict[str, tuple[str, ...]] = {
    "아침": ("가벼움", "적당함"),
    "점심": ("적당함", "든든함"),
    "저녁": ("든든함", "배터짐"),
    "야식": ("가벼움", "적당함"),
    "간식": ("가벼움",),
}

SATIETY_AVOID: dict[str, tuple[str, ...]] = {
    "아침": ("배터짐",),
    "야식": ("배터짐",),
    "간식": ("든든함", "배터짐"),
}

MEALTIME_DISHTYPE_AFFINITY: dict[str, dict[str, int]] = {
    "아침": {"밥": 5, "빵분식": 8, "국찌개": 5, "디저트": 3, "면": -5},
    "점심": {"밥": 5, "면": 5, "국찌개": 3, "고기구이": 0},
    "저녁": {"고기구이": 8, "국찌개": 5, "면": 3, "밥": 0},
    "야식": {"빵분식": 5, "면": 5, "고기구이": 3, "디저트": 3},
    "간식": {"디저트": 10, "빵분식": 8, "샐러드": 3, "면": -5},
}


@dataclass(frozen=True)
class SynergyRule:
    """A combination bonus: when every condition holds, items carrying ``tag`` in ``facet`` get ``points``.

    ``penalty_tag``/``penalty_points`` add a second branch for items carrying the
    opposite tag in the same facet.
    """

    label: str
    conditions: Mapping[str, tuple[str, ...]]
    facet: str
    tag: str
    points: int
    penalty_tag: str | None = None
    penalty_points: int = 0

    def applies(self, selections: Selections) -> bool:
        return all(
            bool(set(active_values(selections, facet)) & set(values))
            for facet, values in self.conditions.items()
        )

    def delta(self, menu: MenuItem) -> int:
        values = menu.facet_values(self.facet)
        if self.tag in values:
            return self.points
        if self.penalty_tag is not None and self.penalty_tag in values:
            return self.penalty_points
        return 0


SYNERGY_RULES: tuple[SynergyRule, ...] = (
    SynergyRule("비+뜨거운=국물", {"context": ("비",), "temperature": ("뜨거운",)}, "dish_type", "국찌개", 15),
    SynergyRule("비=분식", {"context": ("비",)}, "dish_type", "빵분식", 8),
    SynergyRule("추운날+국찌개=매콤", {"context": ("추운날",), "dish_type": ("국찌개",)}, "taste", "매콤", 10),
    SynergyRule("더운날=차가운", {"context": ("더운날",)}, "temperature", "차가운", 15),
    SynergyRule("아침해장=국물", {"context": ("해장",), "meal_time": ("아침",)}, "dish_type", "국찌개", 20),
    SynergyRule(
        "다이어트=저칼",
        {"context": ("다이어트",)},
        "calories",
        "저칼로리",
        15,
        penalty_tag="고칼로리",
        penalty_points=-15,
    ),
    SynergyRule("혼밥+시간없어=분식", {"companion": ("혼밥",), "context": ("시간없어",)}, "dish_type", "빵분식", 10),
    SynergyRule("회식=고기", {"companion": ("회식",)}, "dish_type", "고기구이", 12),
    SynergyRule("연인=양식", {"companion": ("연인",)}, "cuisine", "양식", 8),
)


def active_values(selections: Selections, facet: str) -> list[str]:
    """Selected values for *facet*, or nothing when its no-preference sentinel is among them."""
    values = selections.get(facet)
    if FACET_SENTINELS.get(facet) in values:
        return []
    return values


def _intersects(a: Iterable[str], b: Iterable[str]) -> bool:
    return not set(a).isdisjoint(b)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _hard_filter(
    menus: list[MenuItem], facet: str, wanted: list[str], min_results: int,
) -> list[MenuItem]:
    if not wanted:
        return menus
    filtered = [m for m in menus if _intersects(m.facet_values(facet), wanted)]
    return filtered if len(filtered) >= min_results else menus


def _score_taste(menu: MenuItem, tastes: list[str]) -> int:
    matches = sum(1 for t in tastes if t in menu.tags.taste)
    if matches == 0:
        return TASTE_MISMATCH
    ratio = matches / len(tastes)
    return matches * TASTE_PER_MATCH + _round_half_up(ratio * TASTE_RATIO_WEIGHT)


def _score_texture(menu: MenuItem, tastes: list[str]) -> int | None:
    preferred = {tex for t in tastes for tex in TEXTURE_AFFINITIES.get(t, ())}
    if not preferred:
        return None
    return TEXTURE_PER_MATCH * sum(1 for tex in menu.tags.texture if tex in preferred)


def _score_satiety(menu: MenuItem, meal_times: list[str]) -> int | None:
    known = [mt for mt in meal_times if mt in SATIETY_PREFERENCE]
    if not known:
        return None
    satiety = menu.tags.satiety
    if any(satiety in SATIETY_PREFERENCE[mt] for mt in known):
        return SATIETY_MATCH
    if any(satiety in SATIETY_AVOID.get(mt, ()) for mt in known):
        return SATIETY_MISMATCH
    return None


def _score_dish_time_affinity(menu: MenuItem, meal_times: list[str]) -> int | None:
    tables = [MEALTIME_DISHTYPE_AFFINITY[mt] for mt in meal_times if mt in MEALTIME_DISHTYPE_AFFINITY]
    if not tables:
        return None
    total = 0
    found = False
    for dish_type in menu.tags.dish_type:
        values = [table[dish_type] for table in tables if dish_type in table]
        if values:
            total += max(values)
            found = True
    return total if found else None


def _score_weather(menu: MenuItem, weather_temp: float | None) -> int | None:
    if weather_temp is None:
        return None
    if weather_temp >= HOT_WEATHER_TEMP and "차가운" in menu.tags.temperature:
        return WEATHER_TEMP_BONUS
    if weather_temp <= COLD_WEATHER_TEMP and "뜨거운" in menu.tags.temperature:
        return WEATHER_TEMP_BONUS
    return None


def score_menu(
    menu: MenuItem,
    selections: Selections,
    weather_temp: float | None = None,
    rules: Sequence[SynergyRule] = SYNERGY_RULES,
) -> ScoredMenu:
    """Score one item against a selection snapshot."""
    breakdown: dict[str, int] = {}

    meal_times = selections.get("meal_time")
    if meal_times:
        matched = _intersects(menu.tags.meal_time, meal_times)
        breakdown["meal_time"] = MEAL_TIME_MATCH if matched else MEAL_TIME_MISMATCH

    companions = selections.get("companion")
    if companions:
        matched = _intersects(menu.tags.companion, companions)
        breakdown["companion"] = COMPANION_MATCH if matched else COMPANION_MISMATCH

    tastes = selections.get("taste")
    if tastes:
        breakdown["taste"] = _score_taste(menu, tastes)

    temperatures = active_values(selections, "temperature")
    if temperatures:
        matched = _intersects(menu.tags.temperature, temperatures)
        breakdown["temperature"] = TEMPERATURE_MATCH if matched else TEMPERATURE_MISMATCH

    budgets = active_values(selections, "budget")
    if budgets:
        matched = _intersects(menu.tags.budget, budgets)
        breakdown["budget"] = BUDGET_MATCH if matched else BUDGET_MISMATCH

    # Bonus only: an unmatched context says nothing against the item.
    contexts = active_values(selections, "context")
    if contexts and _intersects(menu.tags.context, contexts):
        breakdown["context"] = CONTEXT_MATCH

    methods = active_values(selections, "cooking_method")
    if methods and _intersects(menu.tags.cooking_method, methods):
        breakdown["cooking_method"] = COOKING_METHOD_MATCH

    if tastes:
        texture = _score_texture(menu, tastes)
        if texture is not None:
            breakdown["texture"] = texture

    if meal_times:
        satiety = _score_satiety(menu, meal_times)
        if satiety is not None:
            breakdown["satiety"] = satiety
        affinity = _score_dish_time_affinity(menu, meal_times)
        if affinity is not None:
            breakdown["dish_time_affinity"] = affinity

    for rule in rules:
        if not rule.applies(selections):
            continue
        delta = rule.delta(menu)
        if delta:
            breakdown[f"synergy:{rule.label}"] = delta

    weather = _score_weather(menu, weather_temp)
    if weather is not None:
        breakdown["weather_temp"] = weather

    return ScoredMenu(menu=menu, score=sum(breakdown.values()), breakdown=breakdown)


def score(
    catalog: Sequence[MenuItem],
    selections: Selections,
    exclude_ids: Iterable[str] = (),
    weather_temp: float | None = None,
) -> list[ScoredMenu]:
    """Filter the catalog and score every surviving item, in catalog order."""
    excluded = set(exclude_ids)
    menus = [m for m in catalog if m.id not in excluded]

    menus = _hard_filter(
        menus, "cuisine", active_values(selections, "cuisine"), MIN_CUISINE_FILTER_RESULTS,
    )
    menus = _hard_filter(
        menus, "dish_type", active_values(selections, "dish_type"), MIN_DISH_TYPE_FILTER_RESULTS,
    )

    return [score_menu(m, selections, weather_temp) for m in menus]
