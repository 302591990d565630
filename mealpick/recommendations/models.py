from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MenuTags(BaseModel):
    model_config = ConfigDict(frozen=True)

    meal_time: list[str] = Field(default_factory=list)
    companion: list[str] = Field(default_factory=list)
    cuisine: list[str] = Field(default_factory=list)
    cooking_method: list[str] = Field(default_factory=list)
    taste: list[str] = Field(default_factory=list)
    dish_type: list[str] = Field(default_factory=list)
    temperature: list[str] = Field(default_factory=list)
    budget: list[str] = Field(default_factory=list)
    context: list[str] = Field(default_factory=list)
    texture: list[str] = Field(default_factory=list)
    satiety: str = ""


class MenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    name_en: str = ""
    emoji: str = ""
    description: str = ""
    image_keywords: list[str] = Field(default_factory=list)
    spicy_level: int = Field(default=0, ge=0, le=3)
    cook_time: str = ""
    calories: str = ""
    price_range: str = ""
    tags: MenuTags

    def facet_values(self, facet: str) -> list[str]:
        """Return the tag values for *facet*, treating scalar fields as one-element lists."""
        if facet in MenuTags.model_fields:
            value = getattr(self.tags, facet)
        else:
            value = getattr(self, facet, None)
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [value]
        return list(value)


SELECTION_FACETS = (
    "meal_time",
    "companion",
    "cuisine",
    "cooking_method",
    "taste",
    "dish_type",
    "temperature",
    "budget",
    "context",
)


class Selections(BaseModel):
    """User answers per question facet. Every facet holds zero or more tag values."""

    meal_time: list[str] = Field(default_factory=list)
    companion: list[str] = Field(default_factory=list)
    cuisine: list[str] = Field(default_factory=list)
    cooking_method: list[str] = Field(default_factory=list)
    taste: list[str] = Field(default_factory=list)
    dish_type: list[str] = Field(default_factory=list)
    temperature: list[str] = Field(default_factory=list)
    budget: list[str] = Field(default_factory=list)
    context: list[str] = Field(default_factory=list)

    @field_validator(*SELECTION_FACETS, mode="before")
    @classmethod
    def _coerce_single_value(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value else []
        return value

    def get(self, facet: str) -> list[str]:
        return list(getattr(self, facet, None) or [])


@dataclass
class ScoredMenu:
    menu: MenuItem
    score: int
    breakdown: dict[str, int] = field(default_factory=dict)


@dataclass
class Recommendation:
    primary: MenuItem | None
    alternatives: list[MenuItem] = field(default_factory=list)


# ── API shapes ───────────────────────────────────────────────────────────


class RecommendationRequest(BaseModel):
    selections: Selections = Field(default_factory=Selections)
    exclude_ids: list[str] = Field(default_factory=list)
    weather_temp: float | None = None
    count: int = Field(default=3, ge=0, le=9)


class RecommendationResponse(BaseModel):
    recommended: MenuItem | None
    alternatives: list[MenuItem]
    reason: str | None = None
    total_candidates: int


class ReasonRequest(BaseModel):
    menu_id: str = Field(..., min_length=1)
    selections: Selections = Field(default_factory=Selections)


class ReasonResponse(BaseModel):
    menu_id: str
    reason: str
